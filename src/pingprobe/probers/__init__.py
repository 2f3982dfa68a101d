from pingprobe.probers.base import Prober
from pingprobe.probers.command import CommandProber
from pingprobe.probers.raw_socket import SocketProber
from pingprobe.probers.tcp import TcpProber

__all__ = ["Prober", "CommandProber", "SocketProber", "TcpProber"]
