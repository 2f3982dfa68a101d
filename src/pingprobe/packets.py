"""
packets.py

Class representations of IPv4 and ICMP packets, plus the Internet
checksum used to seal outgoing ICMP Echo Requests.
"""

import struct
from typing import Optional

from pingprobe.constants import ICMP_ECHO_REPLY, ICMP_ECHO_REQUEST
from pingprobe.exceptions import PacketParseError

ICMP_HEADER_FORMAT = "!BBHHH"
ICMP_HEADER_LENGTH = 8
IP_HEADER_MIN_LENGTH = 20


def checksum_value(data: bytes) -> int:
    """Calculates the one's-complement Internet checksum of data."""
    if len(data) % 2 == 1:
        data += b"\0"

    words = struct.unpack("!%dH" % (len(data) // 2), data)
    checksum = sum(words)

    while checksum >> 16:
        checksum = (checksum & 0xFFFF) + (checksum >> 16)

    return ~checksum & 0xFFFF


def calculate_checksum(data: bytes) -> bytes:
    """Returns the Internet checksum of data as two big-endian bytes."""
    return struct.pack("!H", checksum_value(data))


class IP:
    """Represents the IPv4 header of a received datagram."""

    def __init__(self, raw: bytes):
        self.raw = raw
        self.version = 4
        self.ihl = 5
        self.length = 0
        self.ttl = 0
        self.proto = 0
        self.src = "0.0.0.0"
        self.dst = "0.0.0.0"
        self.payload = b""

        self._parse(raw)

    def _parse(self, raw: bytes) -> None:
        """Parses a raw IP packet."""
        if len(raw) < IP_HEADER_MIN_LENGTH:
            raise PacketParseError(
                f"Packet too short: {len(raw)} bytes (expected at least {IP_HEADER_MIN_LENGTH})"
            )

        try:
            header = struct.unpack("!BBHHHBBH4s4s", raw[:IP_HEADER_MIN_LENGTH])
        except struct.error as e:
            raise PacketParseError(f"Malformed IP packet: {e}") from e

        self.version = header[0] >> 4
        self.ihl = header[0] & 0xF
        if self.ihl < 5:
            raise PacketParseError(f"Invalid IHL: {self.ihl} (must be at least 5)")

        header_length = self.ihl * 4
        if len(raw) < header_length:
            raise PacketParseError(
                f"Packet too short for IHL: {len(raw)} bytes (expected {header_length})"
            )

        self.length = header[2]
        self.ttl = header[5]
        self.proto = header[6]
        self.src = self._ip_to_str(header[8])
        self.dst = self._ip_to_str(header[9])
        self.payload = raw[header_length:]

    def _ip_to_str(self, ip_bytes: bytes) -> str:
        """Converts an IP address from bytes to string format."""
        return ".".join(map(str, ip_bytes))

    def __repr__(self) -> str:
        return f"IP(src={self.src}, dst={self.dst}, ttl={self.ttl}, proto={self.proto})"


class ICMP:
    """Represents an ICMP echo message (request or reply)."""

    def __init__(
        self,
        raw: Optional[bytes] = None,
        type: int = ICMP_ECHO_REQUEST,
        code: int = 0,
        identifier: int = 0,
        sequence: int = 0,
        payload: bytes = b"",
    ):
        self.raw = raw
        self.type = type
        self.code = code
        self.checksum = 0
        self.identifier = identifier
        self.sequence = sequence
        self.payload = payload

        if raw is not None:
            self._parse(raw)

    def _parse(self, raw: bytes) -> None:
        """Parses a raw ICMP message."""
        if len(raw) < ICMP_HEADER_LENGTH:
            raise PacketParseError(
                f"ICMP message too short: {len(raw)} bytes (expected at least {ICMP_HEADER_LENGTH})"
            )
        try:
            header = struct.unpack(ICMP_HEADER_FORMAT, raw[:ICMP_HEADER_LENGTH])
        except struct.error as e:
            raise PacketParseError("Malformed ICMP packet") from e

        self.type, self.code, self.checksum, self.identifier, self.sequence = header
        self.payload = raw[ICMP_HEADER_LENGTH:]

    def _header(self, checksum: int) -> bytes:
        return struct.pack(
            ICMP_HEADER_FORMAT,
            self.type,
            self.code,
            checksum,
            self.identifier,
            self.sequence,
        )

    def __bytes__(self) -> bytes:
        """Serializes the ICMP message into bytes."""
        # The checksum covers the message with its own field zeroed, so the
        # final message is rebuilt rather than patched.
        self.checksum = checksum_value(self._header(0) + self.payload)
        return self._header(self.checksum) + self.payload

    def __repr__(self) -> str:
        return (
            f"ICMP(type={self.type}, code={self.code}, "
            f"id={self.identifier}, seq={self.sequence})"
        )

    @property
    def is_echo_reply(self) -> bool:
        """True if this message is an ICMP Echo Reply."""
        return self.type == ICMP_ECHO_REPLY and self.code == 0

    def answers(self, identifier: int, sequence: int) -> bool:
        """True if this message is the echo reply to the given request."""
        return (
            self.is_echo_reply
            and self.identifier == identifier
            and self.sequence == sequence
        )


def build_echo_request(payload: bytes, identifier: int = 0, sequence: int = 0) -> bytes:
    """Creates an ICMP Echo Request carrying payload."""
    return bytes(ICMP(type=ICMP_ECHO_REQUEST, code=0, identifier=identifier,
                      sequence=sequence, payload=payload))
