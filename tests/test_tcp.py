"""Unit tests for the TCP connect prober (pingprobe.probers.tcp)."""
import socket
import time
from unittest.mock import MagicMock, patch

import pytest

from pingprobe.models import Target
from pingprobe.probers.tcp import TcpProber


@pytest.fixture
def listener():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    yield server.getsockname()[1]
    server.close()


def _loopback_info(port):
    return [(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("127.0.0.1", port))]


def test_connect_latency_excludes_name_resolution(listener):
    def slow_getaddrinfo(host, port, *args, **kwargs):
        time.sleep(0.5)
        return _loopback_info(port)

    with patch("pingprobe.probers.tcp.socket.getaddrinfo", side_effect=slow_getaddrinfo):
        latency = TcpProber().probe(Target("service.example", port=listener, timeout=2))

    assert latency is not None
    assert 0 <= latency < 500


def test_connects_to_first_resolved_address():
    sock = MagicMock()
    sock.__enter__.return_value = sock
    with patch("pingprobe.probers.tcp.socket.getaddrinfo", return_value=_loopback_info(8080)), \
         patch("pingprobe.probers.tcp.socket.socket", return_value=sock) as mock_socket:
        assert TcpProber().probe(Target("service.example", port=8080, timeout=3)) is not None

    mock_socket.assert_called_once_with(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    sock.settimeout.assert_called_once_with(3)
    sock.connect.assert_called_once_with(("127.0.0.1", 8080))
    sock.__exit__.assert_called_once()


def test_unresolvable_host_is_unreachable():
    with patch("pingprobe.probers.tcp.socket.getaddrinfo",
               side_effect=socket.gaierror("Name or service not known")), \
         patch("pingprobe.probers.tcp.socket.socket") as mock_socket:
        assert TcpProber().probe(Target("no-such-host.invalid")) is None
    mock_socket.assert_not_called()


def test_connect_timeout_is_unreachable_and_closes():
    sock = MagicMock()
    sock.__enter__.return_value = sock
    sock.connect.side_effect = socket.timeout("timed out")
    with patch("pingprobe.probers.tcp.socket.getaddrinfo", return_value=_loopback_info(80)), \
         patch("pingprobe.probers.tcp.socket.socket", return_value=sock):
        assert TcpProber().probe(Target("127.0.0.1", timeout=1)) is None
    sock.__exit__.assert_called_once()
