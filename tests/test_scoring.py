import pytest

from src.pulse.models.app_types import (
    VITAL_TYPES,
    Regime,
    Severity,
    VitalSample,
    VitalType,
    empty_bundle,
)
from src.pulse.scoring.severity import (
    aggregate,
    classify_vital,
    count_by_severity,
    regime_for,
    regime_from_status,
    severity_rank,
    sort_by_severity,
    vital_levels,
    worst,
)


def bundle(**latest):
    """Bundle with one sample per given vital (keyword = VitalType value)."""
    b = empty_bundle()
    for key, value in latest.items():
        b[VitalType(key)] = (VitalSample(timestamp=0, value=value),)
    return b


# 1) Per-vital boundaries

@pytest.mark.parametrize("value, expected", [
    (60, Severity.STABLE), (100, Severity.STABLE),
    (59.99, Severity.WARNING), (50, Severity.WARNING),
    (120, Severity.WARNING), (100.01, Severity.WARNING),
    (49.99, Severity.CRITICAL), (120.01, Severity.CRITICAL),
])
def test_heart_rate_boundaries(value, expected):
    assert classify_vital(value, VitalType.HEART_RATE) == expected


@pytest.mark.parametrize("vital, value, expected", [
    (VitalType.SYSTOLIC, 90, Severity.STABLE),
    (VitalType.SYSTOLIC, 140.5, Severity.WARNING),
    (VitalType.SYSTOLIC, 160, Severity.WARNING),
    (VitalType.SYSTOLIC, 79.9, Severity.CRITICAL),
    (VitalType.DIASTOLIC, 90, Severity.STABLE),
    (VitalType.DIASTOLIC, 50, Severity.WARNING),
    (VitalType.DIASTOLIC, 100.1, Severity.CRITICAL),
    (VitalType.SPO2, 95, Severity.STABLE),
    (VitalType.SPO2, 94.99, Severity.WARNING),
    (VitalType.SPO2, 90, Severity.WARNING),
    (VitalType.SPO2, 89.99, Severity.CRITICAL),
    (VitalType.TEMPERATURE, 36.0, Severity.STABLE),
    (VitalType.TEMPERATURE, 37.5, Severity.STABLE),
    (VitalType.TEMPERATURE, 38.5, Severity.WARNING),
    (VitalType.TEMPERATURE, 35.4, Severity.CRITICAL),
])
def test_other_vital_boundaries(vital, value, expected):
    assert classify_vital(value, vital) == expected


def test_classify_is_pure():
    results = {classify_vital(37.9, "temperature") for _ in range(100)}
    assert results == {Severity.WARNING}


# 2) Aggregation

def test_empty_bundle_is_stable():
    assert aggregate(empty_bundle()) == Severity.STABLE
    assert vital_levels(empty_bundle()) == {}


def test_missing_vitals_are_ignored():
    assert aggregate(bundle(heartRate=72)) == Severity.STABLE
    assert aggregate(bundle(spo2=80)) == Severity.CRITICAL


@pytest.mark.parametrize("b, expected", [
    (bundle(heartRate=72, systolic=120, diastolic=80, spo2=98, temperature=36.8), Severity.STABLE),
    (bundle(heartRate=110, systolic=120, diastolic=80, spo2=98, temperature=36.8), Severity.WARNING),
    (bundle(heartRate=110, systolic=120, diastolic=80, spo2=98, temperature=39.0), Severity.CRITICAL),
    (bundle(heartRate=72, systolic=170, diastolic=95, spo2=92, temperature=38.0), Severity.CRITICAL),
])
def test_worst_wins(b, expected):
    assert aggregate(b) == expected


def test_aggregate_uses_latest_sample_only():
    b = empty_bundle()
    b[VitalType.HEART_RATE] = (
        VitalSample(timestamp=0, value=30.0),
        VitalSample(timestamp=1, value=70.0),
    )
    assert aggregate(b) == Severity.STABLE


def test_aggregate_iff_properties(rng):
    for _ in range(2000):
        b = empty_bundle()
        for vital in VITAL_TYPES:
            if rng.random() < 0.8:
                b[vital] = (VitalSample(timestamp=0, value=float(rng.uniform(0, 200))),)
        levels = vital_levels(b).values()
        overall = aggregate(b)

        assert (overall == Severity.CRITICAL) == any(l == Severity.CRITICAL for l in levels)
        assert (overall == Severity.STABLE) == all(l == Severity.STABLE for l in levels)


# 3) Ranking / mapping helpers

def test_rank_and_worst():
    assert [severity_rank(s) for s in (Severity.STABLE, Severity.WARNING, Severity.CRITICAL)] == [0, 1, 2]
    assert worst([]) == Severity.STABLE
    assert worst(["warning", "stable"]) == Severity.WARNING


@pytest.mark.parametrize("sev, regime", [
    (Severity.STABLE, Regime.NORMAL),
    (Severity.WARNING, Regime.WARNING),
    (Severity.CRITICAL, Regime.CRITICAL),
])
def test_regime_for(sev, regime):
    assert regime_for(sev) == regime


@pytest.mark.parametrize("status, regime", [
    ("critical", Regime.CRITICAL),
    ("Warning ", Regime.WARNING),
    ("stable", Regime.NORMAL),
    (None, Regime.NORMAL),
    ("discharged", Regime.NORMAL),
])
def test_regime_from_status(status, regime):
    assert regime_from_status(status) == regime


def test_sort_by_severity_keeps_roster_order_within_level():
    levels = {
        "a": Severity.STABLE,
        "b": Severity.CRITICAL,
        "c": Severity.WARNING,
        "d": Severity.CRITICAL,
        "e": None,
    }
    assert sort_by_severity(["a", "b", "c", "d", "e"], levels.get) == ["b", "d", "c", "a", "e"]


def test_count_by_severity():
    counts = count_by_severity([Severity.STABLE, Severity.CRITICAL, None, Severity.CRITICAL])
    assert counts == {Severity.STABLE: 1, Severity.WARNING: 0, Severity.CRITICAL: 2}
