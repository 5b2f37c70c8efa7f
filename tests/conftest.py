import itertools

import numpy as np
import pytest

from src.pulse.config.settings import Settings
from src.pulse.sim.engine import Simulator


@pytest.fixture
def default_seed() -> int:
    """Default random seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(default_seed):
    return np.random.default_rng(default_seed)


@pytest.fixture
def clock():
    """Fake ms clock that moves forward 2500 ms per call."""
    counter = itertools.count(start=1_700_000_000_000, step=2500)
    return lambda: next(counter)


@pytest.fixture
def sim(rng, clock):
    s = Simulator(settings=Settings(tick_interval_ms=20), rng=rng, clock=clock)
    yield s
    s.stop()
