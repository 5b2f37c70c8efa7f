from __future__ import annotations

import math

import numpy as np


def gaussian(mean: float, std_dev: float, rng: np.random.Generator) -> float:
    """Draw from N(mean, std_dev) with the Box-Muller transform.

    The first uniform is redrawn while it is exactly 0 so log() stays finite.
    """
    if std_dev < 0:
        raise ValueError("std_dev must be non-negative")

    u1 = rng.random()
    while u1 == 0.0:
        u1 = rng.random()
    u2 = rng.random()

    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return z0 * std_dev + mean
