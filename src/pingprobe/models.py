"""
models.py

Data types shared by the facade and the probers.
"""

import enum
from dataclasses import dataclass

from pingprobe.constants import (DEFAULT_PING_COUNT, DEFAULT_PORT,
                                 DEFAULT_TIMEOUT, DEFAULT_TTL)
from pingprobe.exceptions import UnknownMethodError


@dataclass
class Target:
    '''
    Represents the host a probe is aimed at.

    Attributes:
        host (str): Hostname or IP literal.
        ttl (int): Hop limit of outgoing packets.
        port (int): Port used by the TCP connect probe.
        timeout (float): Seconds to wait for a reply.
        ping_count (int): Echo requests sent by the external command.
    '''
    host: str
    ttl: int = DEFAULT_TTL
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    ping_count: int = DEFAULT_PING_COUNT


class ProbeMethod(enum.Enum):
    """Strategies available for checking reachability."""
    EXEC = "exec"
    FSOCKOPEN = "fsockopen"
    SOCKET = "socket"

    @classmethod
    def parse(cls, value) -> "ProbeMethod":
        """Resolves a method name or alias into a ProbeMethod."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        method = _ALIASES.get(name)
        if method is None:
            try:
                method = cls(name)
            except ValueError:
                raise UnknownMethodError(f"Unknown probe method: {value!r}") from None
        return method


_ALIASES = {
    "command": ProbeMethod.EXEC,
    "tcp": ProbeMethod.FSOCKOPEN,
    "raw": ProbeMethod.SOCKET,
}
