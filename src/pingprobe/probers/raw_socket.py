"""
probers/raw_socket.py

Sends an ICMP Echo Request over a raw socket and times the matching
Echo Reply. Opening a raw socket needs elevated privileges; without them
the target is reported as unreachable.
"""

import itertools
import logging
import os
import socket
import time
from typing import Optional

from pingprobe.constants import DEFAULT_PAYLOAD, RECV_BUFFER_SIZE
from pingprobe.exceptions import PacketParseError
from pingprobe.models import Target
from pingprobe.packets import ICMP, IP, build_echo_request
from pingprobe.probers.base import Prober
from pingprobe.utils import resolve_ip, round_ms

logger = logging.getLogger(__name__)


class SocketProber(Prober):
    """Times a raw ICMP echo exchange with the target."""

    def __init__(self, payload: bytes = DEFAULT_PAYLOAD, identifier: Optional[int] = None):
        """
        Args:
            payload: Data carried by each Echo Request.
            identifier: ICMP identifier; defaults to the low 16 bits of the PID.
        """
        self.payload = payload
        self.identifier = (os.getpid() if identifier is None else identifier) & 0xFFFF
        self._sequence = itertools.count(1)

    def _next_sequence(self) -> int:
        return next(self._sequence) & 0xFFFF

    def _create_raw_socket(self) -> Optional[socket.socket]:
        """Creates a raw ICMP socket, or None if the OS refuses."""
        try:
            return socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
        except PermissionError as e:
            logger.warning(f"Permission denied for raw ICMP socket: {e}")
        except OSError as e:
            logger.warning(f"Failed to create raw ICMP socket: {e}")
        return None

    def probe(self, target: Target) -> Optional[int]:
        ip = resolve_ip(target.host)
        if ip is None:
            logger.debug(f"Could not resolve {target.host}")
            return None

        sock = self._create_raw_socket()
        if sock is None:
            return None

        sequence = self._next_sequence()
        packet = build_echo_request(self.payload, identifier=self.identifier, sequence=sequence)

        with sock:
            try:
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, target.ttl)
            except OSError as e:
                logger.debug(f"Could not set TTL {target.ttl} on raw socket: {e}")

            try:
                sock.connect((ip, 0))
                start = time.perf_counter()
                sock.send(packet)
            except OSError as e:
                logger.debug(f"Failed to send echo request to {ip}: {e}")
                return None

            elapsed = self._await_reply(sock, start, target.timeout, sequence)

        if elapsed is None:
            logger.debug(f"No echo reply from {ip} within {target.timeout}s")
            return None
        latency = round_ms(elapsed)
        logger.debug(f"Echo reply from {ip} seq={sequence} in {latency} ms")
        return latency

    def _await_reply(self, sock: socket.socket, start: float, timeout: float,
                     sequence: int) -> Optional[float]:
        """
        Reads datagrams until the reply to sequence arrives or the timeout
        elapses. Returns seconds since start, or None on timeout.
        """
        deadline = start + timeout
        while True:
            remaining = deadline - time.perf_counter()
            if remaining <= 0:
                return None
            sock.settimeout(remaining)
            try:
                data = sock.recv(RECV_BUFFER_SIZE)
            except OSError:
                return None
            received = time.perf_counter()

            if self._is_reply(data, sequence):
                return received - start

    def _is_reply(self, data: bytes, sequence: int) -> bool:
        """True if data is the echo reply to our request with sequence."""
        try:
            icmp = ICMP(IP(data).payload)
        except PacketParseError as e:
            logger.debug(f"Ignoring malformed datagram: {e}")
            return False
        if not icmp.answers(self.identifier, sequence):
            logger.debug(f"Ignoring unrelated {icmp!r}")
            return False
        return True
