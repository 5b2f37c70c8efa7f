from __future__ import annotations

from typing import Optional

from src.pulse.models.app_types import HISTORY_CAPACITY, Trend, VitalSample, VitalSeries

TREND_WINDOW = 3
TREND_TOLERANCE = 0.02


def append(series: VitalSeries, sample: VitalSample, capacity: int = HISTORY_CAPACITY) -> VitalSeries:
    """Return a new series with `sample` at the end, oldest samples dropped past capacity."""
    out = tuple(series) + (sample,)
    if len(out) > capacity:
        out = out[len(out) - capacity:]
    return out


def latest(series: VitalSeries) -> Optional[float]:
    if not series:
        return None
    return series[-1].value


def latest_value(series: VitalSeries, default: float = 0.0) -> float:
    """Latest value, or `default` for an empty series."""
    value = latest(series)
    return default if value is None else value


def trend(series: VitalSeries) -> Trend:
    # first vs last of the most recent readings, within 2% counts as flat
    if len(series) < 2:
        return Trend.STABLE

    recent = series[-TREND_WINDOW:]
    first, last = recent[0].value, recent[-1].value
    diff = last - first

    # diff == 0 also covers a zero first reading, where the tolerance is 0
    if diff == 0 or abs(diff) < abs(first * TREND_TOLERANCE):
        return Trend.STABLE
    return Trend.UP if diff > 0 else Trend.DOWN
