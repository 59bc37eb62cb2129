import os
import random
from typing import Iterable, List

import pytest

# pygame must not try to open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class ScriptedRNG(random.Random):
    """Replays a fixed list of samples and fails loudly when it runs dry."""

    def __init__(self, samples: Iterable[float]) -> None:
        super().__init__(0)
        self.samples: List[float] = list(samples)
        self.used = 0

    def random(self) -> float:
        if self.used >= len(self.samples):
            raise AssertionError(f"ScriptedRNG exhausted after {self.used} draws")
        value = self.samples[self.used]
        self.used += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.samples) - self.used


@pytest.fixture
def scripted():
    return ScriptedRNG
