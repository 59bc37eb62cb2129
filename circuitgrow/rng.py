"""Random sources. Generators always receive one explicitly so runs can be replayed."""
import random
from typing import Optional


class RNG(random.Random):
    """Seeded RNG to keep deterministic behavior; seed=None draws from OS entropy."""

    def __init__(self, seed: Optional[int] = None) -> None:
        super().__init__(seed)
        self.initial_seed = seed

    def spawn(self) -> "RNG":
        """An independent stream derived from this one, e.g. one per animated wave."""
        return RNG(self.getrandbits(64))


def new_rng(seed: Optional[int] = None) -> RNG:
    return RNG(seed)
