# src/pingprobe/__init__.py
from pingprobe.exceptions import (ConfigurationError, PacketParseError,
                                  PingError, UnknownMethodError)
from pingprobe.models import ProbeMethod, Target
from pingprobe.packets import build_echo_request, calculate_checksum
from pingprobe.ping import Ping
from pingprobe.platforms import OsFamily, detect_os_family

__version__ = "0.1.0"

__all__ = [
    "Ping",
    "ProbeMethod",
    "Target",
    "OsFamily",
    "detect_os_family",
    "build_echo_request",
    "calculate_checksum",
    "PingError",
    "ConfigurationError",
    "UnknownMethodError",
    "PacketParseError",
]
