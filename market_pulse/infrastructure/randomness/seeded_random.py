"""
Infrastructure adapter: random.Random → IRandomSource.
A fixed seed makes a whole run reproducible; no seed draws from system entropy.
"""

import random
from typing import Optional

from market_pulse.domain.ports.random_source_port import IRandomSource


class SeededRandomSource(IRandomSource):
    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()
