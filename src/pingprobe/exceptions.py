"""
exceptions.py

Exceptions used throughout the application.
"""


class PingError(Exception):
    """Base class for all pingprobe errors"""
    pass


class ConfigurationError(PingError, ValueError):
    """Raised when a probe target is configured with an invalid value"""
    pass


class UnknownMethodError(ConfigurationError):
    """Raised when a probe is requested with an unrecognised method"""
    pass


class PacketParseError(PingError):
    """Raised when packet parsing fails"""
    pass
