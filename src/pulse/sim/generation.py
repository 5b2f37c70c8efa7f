"""Synthetic vital-sign trajectories.

Values follow a bounded random walk: proportional noise plus a drift toward a
regime-dependent target, clamped to the vital's physiological bounds. Stable
patients are pulled hard toward the nominal mean; warning and critical
patients mostly recover but occasionally head for an abnormal target.
"""
from __future__ import annotations

import time
from typing import List, Optional

import numpy as np

from src.pulse.config.ranges import VITAL_PARAMS
from src.pulse.models.app_types import (
    HISTORY_COUNT,
    HISTORY_INTERVAL_MS,
    VITAL_TYPES,
    Regime,
    VitalSample,
    VitalSeries,
    VitalSignsBundle,
    VitalType,
)
from src.pulse.sim.gaussian import gaussian

NOISE_FRACTION = 0.015
DRIFT_STRENGTH = 0.08

WARNING_EVENT_PROB = 0.05
CRITICAL_EVENT_PROB = 0.08


def clamp(value: float, lo: float, hi: float) -> float:
    return float(max(lo, min(hi, value)))


def now_ms() -> int:
    return int(time.time() * 1000)


def baseline(vital: VitalType, regime: Regime, rng: np.random.Generator) -> float:
    """Initial value for a vital, biased toward the regime's band."""
    p = VITAL_PARAMS[VitalType(vital)]
    regime = Regime(regime)

    if regime is Regime.NORMAL:
        value = gaussian(p.mean, p.std_dev, rng)
    elif regime is Regime.WARNING:
        shifted = p.mean * 1.15 if rng.random() > 0.5 else p.mean * 0.85
        value = gaussian(shifted, p.std_dev * 1.2, rng)
    else:
        shifted = p.mean * 1.30 if rng.random() > 0.5 else p.mean * 0.70
        value = gaussian(shifted, p.std_dev * 1.5, rng)

    return clamp(value, p.min, p.max)


def _drift(current: float, vital: VitalType, regime: Regime, rng: np.random.Generator) -> float:
    p = VITAL_PARAMS[vital]

    if regime is Regime.NORMAL:
        return (p.mean - current) * DRIFT_STRENGTH * 1.5

    if regime is Regime.WARNING:
        if rng.random() < WARNING_EVENT_PROB:
            target = p.mean * 1.12 if rng.random() > 0.5 else p.mean * 0.88
            return (target - current) * DRIFT_STRENGTH
        return (p.mean - current) * DRIFT_STRENGTH * 0.8

    if rng.random() < CRITICAL_EVENT_PROB:
        target = p.max * 0.85 if rng.random() > 0.5 else p.min * 1.15
        return (target - current) * DRIFT_STRENGTH * 1.5
    return (p.mean - current) * DRIFT_STRENGTH * 0.5


def advance(
    current: float,
    vital: VitalType,
    regime: Regime,
    rng: np.random.Generator,
) -> float:
    """Next value of a vital one step after `current`."""
    vital = VitalType(vital)
    regime = Regime(regime)
    p = VITAL_PARAMS[vital]

    noise = current * NOISE_FRACTION * (rng.random() * 2 - 1)
    drift = _drift(current, vital, regime, rng)

    return clamp(current + noise + drift, p.min, p.max)


def history(
    vital: VitalType,
    count: int = HISTORY_COUNT,
    interval_ms: int = HISTORY_INTERVAL_MS,
    regime: Regime = Regime.NORMAL,
    rng: Optional[np.random.Generator] = None,
    now: Optional[int] = None,
) -> VitalSeries:
    """`count` samples spaced `interval_ms` apart, the last one at `now`."""
    if count < 0:
        raise ValueError("count must be non-negative")
    if interval_ms < 0:
        raise ValueError("interval_ms must be non-negative")
    if rng is None:
        rng = np.random.default_rng()
    if now is None:
        now = now_ms()

    if count == 0:
        return ()

    samples: List[VitalSample] = []

    value = baseline(vital, regime, rng)
    for i in range(count):
        ts = now - (count - i - 1) * interval_ms
        samples.append(VitalSample(timestamp=ts, value=value))
        if i < count - 1:
            value = advance(value, vital, regime, rng)

    return tuple(samples)


def initialize_all_vitals(
    regime: Regime = Regime.NORMAL,
    rng: Optional[np.random.Generator] = None,
    now: Optional[int] = None,
    count: int = HISTORY_COUNT,
    interval_ms: int = HISTORY_INTERVAL_MS,
) -> VitalSignsBundle:
    if rng is None:
        rng = np.random.default_rng()
    if now is None:
        now = now_ms()
    return {
        vital: history(vital, count, interval_ms, regime, rng=rng, now=now)
        for vital in VITAL_TYPES
    }
