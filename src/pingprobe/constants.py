"""
constants.py

Constants used throughout the application.
"""

# ICMP message types
ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8

# Target defaults
DEFAULT_TTL = 255
MAX_TTL = 255
DEFAULT_PORT = 80
DEFAULT_TIMEOUT = 5
DEFAULT_PING_COUNT = 1
MIN_PING_COUNT = 1
MAX_PING_COUNT = 5

# Raw socket probing
DEFAULT_PAYLOAD = b"Ping"
RECV_BUFFER_SIZE = 255

# Extra seconds granted to the ping process on top of its own deadline
COMMAND_GRACE_SECONDS = 2
