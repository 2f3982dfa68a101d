"""
examples/compare_methods.py

Simple example that probes one host with every method and prints the
latency each of them reports.

Usage:
    python compare_methods.py <host> [-p <port>] [-t <timeout>]

Arguments:
    host                    The host name or IP address to probe
    -p, --port <port>       Port for the fsockopen method (default: 80)
    -t, --timeout <secs>    Seconds to wait for each probe (default: 5)

Example:
    sudo python compare_methods.py www.example.com -p 443
"""

import argparse
import logging

from pingprobe import Ping, ProbeMethod


def main():
    """Parses arguments and runs one probe per method."""
    parser = argparse.ArgumentParser(description="Compare pingprobe methods")
    parser.add_argument("host", help="The host name or IP address to probe")
    parser.add_argument("-p", "--port", type=int, default=80,
                        help="Port for the fsockopen method (default: 80)")
    parser.add_argument("-t", "--timeout", type=float, default=5,
                        help="Seconds to wait for each probe (default: 5)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    ping = Ping(args.host, timeout=args.timeout, port=args.port)
    print(f"{ping.host} resolves to {ping.ip_address or 'nothing'}")
    for method in ProbeMethod:
        latency = ping.ping(method)
        shown = f"{latency} ms" if latency is not None else "unreachable"
        print(f"  {method.value:<10} {shown}")


if __name__ == "__main__":
    main()
