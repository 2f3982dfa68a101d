"""
probers/tcp.py

Checks reachability by completing a TCP handshake with the target port.
Only proves that something accepts connections on that port.
"""

import logging
import socket
import time
from typing import Optional

from pingprobe.models import Target
from pingprobe.probers.base import Prober
from pingprobe.utils import round_ms

logger = logging.getLogger(__name__)


class TcpProber(Prober):
    """Times a TCP connect to target.host:target.port."""

    def _resolve(self, target: Target) -> Optional[tuple]:
        """Returns the first (family, type, proto, address) for the target, or None."""
        try:
            infos = socket.getaddrinfo(target.host, target.port, type=socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            logger.debug(f"Could not resolve {target.host}: {e}")
            return None
        if not infos:
            return None
        family, socktype, proto, _, address = infos[0]
        return family, socktype, proto, address

    def probe(self, target: Target) -> Optional[int]:
        resolved = self._resolve(target)
        if resolved is None:
            return None
        family, socktype, proto, address = resolved

        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as e:
            logger.warning(f"Failed to create TCP socket: {e}")
            return None

        with sock:
            sock.settimeout(target.timeout)
            start = time.perf_counter()
            try:
                sock.connect(address)
            except OSError as e:
                logger.debug(f"TCP connect to {address[0]}:{target.port} failed: {e}")
                return None
            elapsed = time.perf_counter() - start

        latency = round_ms(elapsed)
        logger.debug(f"TCP connect to {address[0]}:{target.port} took {latency} ms")
        return latency
