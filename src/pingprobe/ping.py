"""
ping.py

Ping holds the probe target and dispatches to one of the probe
strategies: the system ping command, a TCP connect, or a raw ICMP socket.

Example:
    ping = Ping("www.example.com")
    latency = ping.ping()           # int milliseconds, or None if down
"""

import logging
from typing import Dict, Optional

from pingprobe.constants import (DEFAULT_PING_COUNT, DEFAULT_PORT,
                                 DEFAULT_TIMEOUT, DEFAULT_TTL, MAX_PING_COUNT,
                                 MAX_TTL, MIN_PING_COUNT)
from pingprobe.exceptions import ConfigurationError
from pingprobe.models import ProbeMethod, Target
from pingprobe.platforms import OsFamily, detect_os_family
from pingprobe.probers import CommandProber, Prober, SocketProber, TcpProber
from pingprobe.probers.command import CommandRunner
from pingprobe.utils import resolve_ip, run_command

logger = logging.getLogger(__name__)


class Ping:
    """
    Pings a host and reports latency in milliseconds.
    """

    def __init__(
        self,
        host: str,
        ttl: int = DEFAULT_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        port: int = DEFAULT_PORT,
        ping_count: int = DEFAULT_PING_COUNT,
        os_family: Optional[OsFamily] = None,
        runner: CommandRunner = run_command,
    ):
        """
        Initialize a new Ping instance.

        Args:
            host (str): The host to be pinged, as a name or IP address.
            ttl (int): Time-to-live in hops, 0 (same host) to 255 (unrestricted).
            timeout (float): Seconds to wait for a reply.
            port (int): Port used by the fsockopen (TCP connect) method.
            ping_count (int): Echo requests sent by the exec method, clamped to 1..5.
            os_family (OsFamily): Ping syntax to use; detected when omitted.
            runner (callable): Executes the ping argument vector.

        Raises:
            ConfigurationError: If host is missing or a value is out of range.
        """
        self._target = Target(host=self._check_host(host))
        self.ttl = ttl
        self.timeout = timeout
        self.port = port
        self.ping_count = ping_count

        self.os_family = os_family if os_family is not None else detect_os_family()
        self._command_prober = CommandProber(self.os_family, runner=runner)
        self._probers: Dict[ProbeMethod, Prober] = {
            ProbeMethod.EXEC: self._command_prober,
            ProbeMethod.FSOCKOPEN: TcpProber(),
            ProbeMethod.SOCKET: SocketProber(),
        }

    @staticmethod
    def _check_host(host) -> str:
        if host is None or not str(host).strip():
            raise ConfigurationError("Error: Host name not supplied.")
        return str(host).strip()

    @staticmethod
    def _to_int(value, name: str) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None

    def __repr__(self) -> str:
        return (
            f"Ping(host={self.host!r}, ttl={self.ttl}, timeout={self.timeout}, "
            f"port={self.port}, ping_count={self.ping_count})"
        )

    @property
    def target(self) -> Target:
        """The current probe target."""
        return self._target

    @property
    def host(self) -> str:
        """Host name or IP address."""
        return self._target.host

    @host.setter
    def host(self, value: str) -> None:
        self._target.host = self._check_host(value)

    @property
    def ttl(self) -> int:
        """TTL in hops."""
        return self._target.ttl

    @ttl.setter
    def ttl(self, value: int) -> None:
        ttl = self._to_int(value, "TTL")
        if not 0 <= ttl <= MAX_TTL:
            raise ConfigurationError(f"TTL must be between 0 and {MAX_TTL}, got {value}")
        self._target.ttl = ttl

    @property
    def timeout(self) -> float:
        """Timeout in seconds."""
        return self._target.timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Timeout must be a number, got {value!r}") from None
        if timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {value}")
        self._target.timeout = timeout

    @property
    def port(self) -> int:
        """Port used by the fsockopen method."""
        return self._target.port

    @port.setter
    def port(self, value: int) -> None:
        port = self._to_int(value, "Port")
        if not 1 <= port <= 65535:
            raise ConfigurationError(f"Port must be between 1 and 65535, got {value}")
        self._target.port = port

    @property
    def ping_count(self) -> int:
        """Number of echo requests sent by the exec method."""
        return self._target.ping_count

    @ping_count.setter
    def ping_count(self, value: int) -> None:
        count = self._to_int(value, "Ping count")
        self._target.ping_count = max(MIN_PING_COUNT, min(MAX_PING_COUNT, count))

    @property
    def command_output(self) -> Optional[str]:
        """Raw output of the last exec ping, or None."""
        return self._command_prober.last_output

    @property
    def ip_address(self) -> Optional[str]:
        """IPv4 address the host currently resolves to, or None."""
        return resolve_ip(self.host)

    def ping(self, method=ProbeMethod.EXEC) -> Optional[int]:
        """
        Ping the host.

        Args:
            method: A ProbeMethod or its name:
                - exec (default): the system ping command.
                - fsockopen: a TCP connect to the configured port.
                - socket: a raw ICMP echo; needs root privileges.

        Returns:
            Latency in whole milliseconds, or None if the host is unreachable.

        Raises:
            UnknownMethodError: If method is not recognised.
        """
        probe_method = ProbeMethod.parse(method)
        prober = self._probers[probe_method]

        logger.debug(f"Probing {self.host} with {probe_method.value}")
        latency = prober.probe(self._target)
        if latency is None:
            logger.info(f"{self.host} is unreachable ({probe_method.value})")
        else:
            logger.info(f"{self.host} replied in {latency} ms ({probe_method.value})")
        return latency
