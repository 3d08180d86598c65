"""
Port (interface) for the pseudo-random source driving price perturbations.
Infrastructure adapters (e.g. SeededRandomSource) must implement this interface;
tests inject fixed draws to assert exact numeric outcomes.
"""

from abc import ABC, abstractmethod


class IRandomSource(ABC):
    @abstractmethod
    def random(self) -> float:
        """Return the next draw, uniformly distributed in [0.0, 1.0)."""
        ...
