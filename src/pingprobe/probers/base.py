"""
probers/base.py

An abstract class for a reachability probe strategy.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pingprobe.models import Target


class Prober(ABC):
    """
    Abstract class for a strategy that checks whether a target is reachable.
    """

    @abstractmethod
    def probe(self, target: Target) -> Optional[int]:
        """
        Probe the target once. Returns the round-trip latency in whole
        milliseconds, or None if the target is unreachable.
        """
        raise NotImplementedError
