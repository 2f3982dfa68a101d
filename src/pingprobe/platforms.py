"""
platforms.py

Operating-system families and the ping command syntax each of them
expects. The family is detected once per process and handed to the
components that need it.
"""

import enum
import functools
import logging
import math
import platform
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


class OsFamily(enum.Enum):
    """Operating-system families with distinct ping command syntax."""
    WINDOWS = "windows"
    DARWIN = "darwin"
    OTHER_UNIX = "unix"


@dataclass(frozen=True)
class PingSyntax:
    """
    Flags of a platform's ping utility.

    Attributes:
        count_flag (str): Flag setting the number of echo requests.
        ttl_flag (str): Flag setting the outgoing TTL.
        timeout_flag (str): Flag setting the timeout (per reply on Windows,
            for the whole run elsewhere).
        timeout_in_ms (bool): True if the timeout is given in milliseconds.
        latency_unit (str): Unit suffix printed directly after the latency.
        extra_flags (tuple): Flags always passed (numeric output).
    """
    count_flag: str
    ttl_flag: str
    timeout_flag: str
    timeout_in_ms: bool
    latency_unit: str
    extra_flags: tuple = ()

    def build_argv(self, host: str, count: int, ttl: int, timeout: float) -> List[str]:
        """Returns the argument vector pinging host with these flags."""
        if self.timeout_in_ms:
            # Windows waits up to -w milliseconds for each reply.
            timeout_value = int(timeout * 1000)
        else:
            # Unix deadlines cover the whole run of count echo requests.
            timeout_value = max(1, math.ceil(timeout * count))
        return [
            "ping",
            *self.extra_flags,
            self.count_flag, str(count),
            self.ttl_flag, str(ttl),
            self.timeout_flag, str(timeout_value),
            host,
        ]


PING_SYNTAX = {
    OsFamily.WINDOWS: PingSyntax("-n", "-i", "-w", timeout_in_ms=True, latency_unit="ms"),
    OsFamily.DARWIN: PingSyntax("-c", "-m", "-t", timeout_in_ms=False, latency_unit="",
                                extra_flags=("-n",)),
    OsFamily.OTHER_UNIX: PingSyntax("-c", "-t", "-w", timeout_in_ms=False, latency_unit="",
                                    extra_flags=("-n",)),
}


def classify_system(system: str) -> OsFamily:
    """Maps a platform.system() style name onto an OsFamily."""
    name = system.strip().upper()
    if name.startswith("WIN"):
        return OsFamily.WINDOWS
    if name == "DARWIN":
        return OsFamily.DARWIN
    return OsFamily.OTHER_UNIX


@functools.lru_cache(maxsize=None)
def detect_os_family(system: Optional[str] = None) -> OsFamily:
    """Detects the OsFamily of the running interpreter."""
    family = classify_system(system if system is not None else platform.system())
    logger.debug(f"Detected OS family: {family.value}")
    return family
