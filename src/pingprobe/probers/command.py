"""
probers/command.py

Checks reachability by running the platform's ping utility and parsing
the round-trip times it prints.

Hosts are validated and the command is always run as an argument vector,
never through a shell.
"""

import logging
import re
from typing import Callable, Iterable, Optional

from pingprobe.constants import COMMAND_GRACE_SECONDS
from pingprobe.models import Target
from pingprobe.platforms import PING_SYNTAX, OsFamily, PingSyntax
from pingprobe.probers.base import Prober
from pingprobe.utils import CommandResult, is_safe_host, run_command, to_int_ms

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., CommandResult]


def latency_pattern(unit: str = "") -> "re.Pattern[str]":
    """Builds the regex matching one reported round-trip time."""
    # Windows prints "time<1ms" for sub-millisecond replies.
    return re.compile(r"time[=<]\s*(?P<time>\d+(?:\.\d+)?)\s*" + re.escape(unit))


def parse_latency(lines: Iterable[str], unit: str = "") -> Optional[int]:
    """
    Averages every round-trip time found in lines. Returns the rounded
    average in milliseconds, or None when no line reports a time.
    """
    pattern = latency_pattern(unit)
    times = []
    for line in lines:
        match = pattern.search(line)
        if match:
            times.append(float(match.group("time")))

    if not times:
        return None
    return to_int_ms(sum(times) / len(times))


class CommandProber(Prober):
    """Runs the system ping command against the target."""

    def __init__(self, os_family: OsFamily, runner: CommandRunner = run_command):
        """
        Args:
            os_family: Family whose ping syntax is used.
            runner: Callable executing an argument vector; see utils.run_command.
        """
        self.os_family = os_family
        self.syntax: PingSyntax = PING_SYNTAX[os_family]
        self.runner = runner
        self.last_output: Optional[str] = None

    def build_argv(self, target: Target) -> list:
        return self.syntax.build_argv(
            host=target.host,
            count=int(target.ping_count),
            ttl=int(target.ttl),
            timeout=target.timeout,
        )

    def probe(self, target: Target) -> Optional[int]:
        self.last_output = None
        if not is_safe_host(target.host):
            logger.warning(f"Refusing to ping malformed host {target.host!r}")
            return None

        argv = self.build_argv(target)
        deadline = target.timeout * target.ping_count + COMMAND_GRACE_SECONDS
        result = self.runner(argv, timeout=deadline)
        self.last_output = result.text

        if not result.ok:
            logger.debug(f"ping exited with status {result.returncode} for {target.host}")
            return None

        latency = parse_latency(result.lines, self.syntax.latency_unit)
        if latency is None:
            logger.debug(f"No round-trip time in ping output for {target.host}")
        return latency
