from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

# Simulation constants shared by the generator and the scheduler
HISTORY_CAPACITY: int = 10          # samples kept per vital (sliding window)
TICK_INTERVAL_MS: int = 2500        # one tick every 2.5 s
HISTORY_COUNT: int = 10             # samples generated at initialisation
HISTORY_INTERVAL_MS: int = 30_000   # spacing of initial samples (30 s)


class VitalType(str, Enum):
    HEART_RATE = "heartRate"
    SYSTOLIC = "systolic"
    DIASTOLIC = "diastolic"
    SPO2 = "spo2"
    TEMPERATURE = "temperature"


# Fixed iteration order for every per-vital loop
VITAL_TYPES: Tuple[VitalType, ...] = tuple(VitalType)


class Severity(str, Enum):
    """Classified clinical urgency, ordered stable < warning < critical."""

    STABLE = "stable"
    WARNING = "warning"
    CRITICAL = "critical"


class Regime(str, Enum):
    """Generation-time bias toward a severity band."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class VitalParams:
    mean: float
    std_dev: float
    min: float
    max: float


@dataclass(frozen=True)
class Thresholds:
    normal: Tuple[float, float]   # inclusive [lo, hi]
    warning: Tuple[float, float]  # inclusive [lo, hi]


@dataclass(frozen=True)
class VitalSample:
    timestamp: int  # ms since epoch
    value: float


# Oldest first, at most HISTORY_CAPACITY samples
VitalSeries = Tuple[VitalSample, ...]

# Always holds all five VitalType keys
VitalSignsBundle = Dict[VitalType, VitalSeries]


@dataclass(frozen=True)
class Patient:
    id: str
    name: str = ""
    bed_number: str = ""
    status: Optional[str] = None  # stored/admin status, used as a regime hint


def empty_bundle() -> VitalSignsBundle:
    return {vital: () for vital in VITAL_TYPES}
