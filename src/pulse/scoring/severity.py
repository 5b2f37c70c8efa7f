from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Optional

from src.pulse.config.ranges import THRESHOLDS
from src.pulse.models.app_types import (
    VITAL_TYPES,
    Regime,
    Severity,
    VitalSignsBundle,
    VitalType,
)
from src.pulse.sim.history import latest

_RANK = {Severity.STABLE: 0, Severity.WARNING: 1, Severity.CRITICAL: 2}

_REGIME_FOR = {
    Severity.STABLE: Regime.NORMAL,
    Severity.WARNING: Regime.WARNING,
    Severity.CRITICAL: Regime.CRITICAL,
}


def _within(value: float, band) -> bool:
    lo, hi = band
    return lo <= value <= hi


def classify_vital(value: float, vital: VitalType) -> Severity:
    t = THRESHOLDS[VitalType(vital)]
    if _within(value, t.normal):
        return Severity.STABLE
    if _within(value, t.warning):
        return Severity.WARNING
    return Severity.CRITICAL


def severity_rank(sev: Severity) -> int:
    return _RANK[Severity(sev)]


def worst(levels: Iterable[Severity]) -> Severity:
    out = Severity.STABLE
    for lvl in levels:
        if severity_rank(lvl) > severity_rank(out):
            out = Severity(lvl)
    return out


def vital_levels(bundle: Mapping[VitalType, tuple]) -> Dict[VitalType, Severity]:
    """Per-vital severity of the latest sample; vitals without data are left out."""
    levels: Dict[VitalType, Severity] = {}
    for vital in VITAL_TYPES:
        value = latest(bundle.get(vital, ()))
        if value is not None:
            levels[vital] = classify_vital(value, vital)
    return levels


def aggregate(bundle: VitalSignsBundle) -> Severity:
    """Worst per-vital severity; a bundle with no data at all is stable."""
    return worst(vital_levels(bundle).values())


def regime_for(sev: Severity) -> Regime:
    return _REGIME_FOR[Severity(sev)]


def regime_from_status(status: Optional[str]) -> Regime:
    """Map a stored patient status to a starting regime (unknown -> normal)."""
    if status is None:
        return Regime.NORMAL
    try:
        return regime_for(Severity(str(status).strip().lower()))
    except ValueError:
        return Regime.NORMAL


def sort_by_severity(
    patient_ids: Iterable[str],
    severity_of: Callable[[str], Optional[Severity]],
) -> List[str]:
    """Critical first, then warning, then stable; roster order kept within a level."""
    def _key(pid: str) -> int:
        sev = severity_of(pid)
        return -severity_rank(sev if sev is not None else Severity.STABLE)

    return sorted(patient_ids, key=_key)


def count_by_severity(levels: Iterable[Optional[Severity]]) -> Dict[Severity, int]:
    # None (patient without vitals) is not counted
    counts = {sev: 0 for sev in Severity}
    for lvl in levels:
        if lvl is not None:
            counts[Severity(lvl)] += 1
    return counts
