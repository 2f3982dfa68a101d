"""
utils.py

Utility functions used throughout the application.
"""

import ipaddress
import logging
import math
import re
import socket
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

# RFC 1123 labels, optionally dot-terminated.
_HOSTNAME_RE = re.compile(
    r"^(?=.{1,253}\.?\Z)[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?"
    r"(?:\.[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?)*\.?\Z"
)


@dataclass
class CommandResult:
    """
    Captured result of an external command.

    Attributes:
        lines (List[str]): Lines written to standard output.
        returncode (int): Exit status; non-zero means failure.
    """
    lines: List[str] = field(default_factory=list)
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def run_command(argv: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
    """
    Runs argv without a shell and captures its standard output.

    A missing executable or an expired timeout is reported as a failed
    CommandResult rather than raised.
    """
    logger.debug(f"Running command: {list(argv)}")
    try:
        proc = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.debug(f"Command timed out after {timeout}s: {argv[0]}")
        output = e.output or ""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        return CommandResult(lines=output.splitlines(), returncode=-1)
    except OSError as e:
        logger.warning(f"Failed to run {argv[0]}: {e}")
        return CommandResult(lines=[], returncode=-1)

    return CommandResult(lines=proc.stdout.splitlines(), returncode=proc.returncode)


def is_safe_host(host: str) -> bool:
    """
    True if host is an IP literal or a well-formed hostname.

    Anything else (whitespace, shell metacharacters, a leading dash that
    the ping utility would read as an option) is rejected.
    """
    if not host or host.startswith("-"):
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    return bool(_HOSTNAME_RE.match(host))


def resolve_ip(hostname: str) -> Optional[str]:
    """Resolve the IPv4 address of a given hostname."""
    try:
        return socket.gethostbyname(hostname)
    except (socket.gaierror, UnicodeError):
        return None


def round_ms(seconds: float) -> int:
    """Converts seconds to whole milliseconds, rounding halves up."""
    return to_int_ms(seconds * 1000.0)


def to_int_ms(milliseconds: float) -> int:
    """Rounds a millisecond value to the nearest integer, halves up."""
    return int(math.floor(milliseconds + 0.5))
