"""
cli.py

Command-line entry point for a single reachability check.

Usage:
    pingprobe <host> [-m exec|fsockopen|socket] [--ttl N] [--timeout S]
              [--port P] [--count N] [-v]

Example:
    pingprobe 127.0.0.1 -m fsockopen --port 22
"""

import argparse
import logging
import sys
from typing import List, Optional

from pingprobe.constants import (DEFAULT_PING_COUNT, DEFAULT_PORT,
                                 DEFAULT_TIMEOUT, DEFAULT_TTL)
from pingprobe.exceptions import ConfigurationError
from pingprobe.models import ProbeMethod
from pingprobe.ping import Ping

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse the command-line arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pingprobe",
        description="Check whether a host is reachable and report its latency.",
    )
    parser.add_argument("host", type=str)
    parser.add_argument("-m", "--method", default=ProbeMethod.EXEC.value,
                        choices=[m.value for m in ProbeMethod])
    parser.add_argument("--ttl", type=int, default=DEFAULT_TTL)
    parser.add_argument("-t", "--timeout", type=float, default=DEFAULT_TIMEOUT)
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("-c", "--count", type=int, default=DEFAULT_PING_COUNT)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Runs one probe and returns the process exit status."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        ping = Ping(args.host, ttl=args.ttl, timeout=args.timeout,
                    port=args.port, ping_count=args.count)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    latency = ping.ping(args.method)
    if latency is None:
        print(f"{ping.host} is unreachable")
        return 1
    print(f"{ping.host} is reachable: {latency} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
