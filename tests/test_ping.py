"""Unit tests for the Ping facade (pingprobe.ping)."""
import pytest
from unittest.mock import MagicMock, patch

from pingprobe import ConfigurationError, Ping, ProbeMethod, UnknownMethodError
from pingprobe.platforms import OsFamily
from pingprobe.utils import CommandResult


def _runner(lines, returncode=0):
    return MagicMock(return_value=CommandResult(lines=lines, returncode=returncode))


@pytest.fixture
def ping():
    return Ping("www.example.com", os_family=OsFamily.OTHER_UNIX)


def test_defaults(ping):
    assert ping.host == "www.example.com"
    assert ping.ttl == 255
    assert ping.port == 80
    assert ping.timeout == 5
    assert ping.ping_count == 1
    assert ping.command_output is None


@pytest.mark.parametrize("host", [None, "", "   "])
def test_missing_host_raises(host):
    with patch("pingprobe.ping.TcpProber") as tcp:
        with pytest.raises(ConfigurationError):
            Ping(host)
        tcp.assert_not_called()


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Ping("")


def test_host(ping):
    ping.host = "www.apple.com"
    assert ping.host == "www.apple.com"
    assert ping.target.host == "www.apple.com"
    with pytest.raises(ConfigurationError):
        ping.host = ""


def test_ttl():
    ping = Ping("www.example.com", ttl=220)
    assert ping.ttl == 220
    ping.ttl = 128
    assert ping.ttl == 128
    for bad in (-1, 256):
        with pytest.raises(ConfigurationError):
            ping.ttl = bad


def test_port(ping):
    ping.port = 2222
    assert ping.port == 2222
    with pytest.raises(ConfigurationError):
        ping.port = 0
    with pytest.raises(ConfigurationError):
        ping.port = 70000


def test_timeout(ping):
    ping.timeout = 2
    assert ping.timeout == 2
    with pytest.raises(ConfigurationError):
        ping.timeout = 0


@pytest.mark.parametrize("value, expected", [(0, 1), (-3, 1), (1, 1), (3, 3), (5, 5), (10, 5)])
def test_ping_count_is_clamped(ping, value, expected):
    ping.ping_count = value
    assert ping.ping_count == expected


def test_constructor_clamps_ping_count():
    assert Ping("example.com", ping_count=9).ping_count == 5


def test_exec_uses_injected_runner():
    runner = _runner(["64 bytes from 93.184.216.34: icmp_seq=1 ttl=56 time=23.4 ms"])
    ping = Ping("www.example.com", ttl=64, timeout=2, os_family=OsFamily.OTHER_UNIX, runner=runner)

    assert ping.ping() == 23
    assert ping.command_output == "64 bytes from 93.184.216.34: icmp_seq=1 ttl=56 time=23.4 ms"
    argv = runner.call_args[0][0]
    assert argv == ["ping", "-n", "-c", "1", "-t", "64", "-w", "2", "www.example.com"]


def test_exec_reflects_updated_target():
    runner = _runner(["time=10 ms", "time=20 ms"])
    ping = Ping("a.example", os_family=OsFamily.DARWIN, runner=runner)
    ping.host = "b.example"
    ping.ttl = 12
    ping.ping_count = 2

    assert ping.ping("exec") == 15
    assert runner.call_args[0][0] == ["ping", "-n", "-c", "2", "-m", "12", "-t", "10", "b.example"]


def test_exec_failure_is_none():
    ping = Ping("www.example.com", os_family=OsFamily.OTHER_UNIX, runner=_runner([], returncode=2))
    assert ping.ping() is None


@pytest.mark.parametrize("method, attr", [
    ("fsockopen", "FSOCKOPEN"),
    ("tcp", "FSOCKOPEN"),
    ("socket", "SOCKET"),
    ("raw", "SOCKET"),
    (ProbeMethod.SOCKET, "SOCKET"),
])
def test_dispatches_to_selected_prober(ping, method, attr):
    expected = getattr(ProbeMethod, attr)
    fake = MagicMock()
    fake.probe.return_value = 7
    ping._probers[expected] = fake

    assert ping.ping(method) == 7
    fake.probe.assert_called_once_with(ping.target)


def test_unknown_method_raises(ping):
    with pytest.raises(UnknownMethodError):
        ping.ping("carrier-pigeon")


def test_ip_address_resolves_literal():
    assert Ping("127.0.0.1").ip_address == "127.0.0.1"


def test_ip_address_unresolvable():
    with patch("pingprobe.ping.resolve_ip", return_value=None):
        assert Ping("no-such-host.invalid").ip_address is None


def test_os_family_detected_when_omitted():
    with patch("pingprobe.ping.detect_os_family", return_value=OsFamily.WINDOWS):
        assert Ping("example.com").os_family is OsFamily.WINDOWS


@pytest.mark.parametrize("attr, value", [
    ("ttl", "abc"),
    ("ttl", None),
    ("port", "http"),
    ("ping_count", "many"),
    ("timeout", "soon"),
    ("timeout", None),
])
def test_non_numeric_values_raise_configuration_error(ping, attr, value):
    with pytest.raises(ConfigurationError):
        setattr(ping, attr, value)
