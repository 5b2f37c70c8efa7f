from __future__ import annotations

from typing import Dict

from src.pulse.models.app_types import Thresholds, VitalParams, VitalType


# Clinically normal distribution and hard physiological bounds per vital
VITAL_PARAMS: Dict[VitalType, VitalParams] = {
    VitalType.HEART_RATE: VitalParams(mean=75, std_dev=8, min=45, max=150),
    VitalType.SYSTOLIC: VitalParams(mean=120, std_dev=10, min=80, max=180),
    VitalType.DIASTOLIC: VitalParams(mean=80, std_dev=8, min=50, max=110),
    VitalType.SPO2: VitalParams(mean=98, std_dev=1.5, min=85, max=100),
    VitalType.TEMPERATURE: VitalParams(mean=36.8, std_dev=0.3, min=35.0, max=40.0),
}


# Anything outside the warning band is critical
THRESHOLDS: Dict[VitalType, Thresholds] = {
    VitalType.HEART_RATE: Thresholds(normal=(60, 100), warning=(50, 120)),
    VitalType.SYSTOLIC: Thresholds(normal=(90, 140), warning=(80, 160)),
    VitalType.DIASTOLIC: Thresholds(normal=(60, 90), warning=(50, 100)),
    VitalType.SPO2: Thresholds(normal=(95, 100), warning=(90, 95)),
    VitalType.TEMPERATURE: Thresholds(normal=(36.0, 37.5), warning=(35.5, 38.5)),
}


VITAL_LABELS: Dict[VitalType, str] = {
    VitalType.HEART_RATE: "Heart rate",
    VitalType.SYSTOLIC: "Systolic BP",
    VitalType.DIASTOLIC: "Diastolic BP",
    VitalType.SPO2: "SpO2",
    VitalType.TEMPERATURE: "Temperature",
}

VITAL_UNITS: Dict[VitalType, str] = {
    VitalType.HEART_RATE: "BPM",
    VitalType.SYSTOLIC: "mmHg",
    VitalType.DIASTOLIC: "mmHg",
    VitalType.SPO2: "%",
    VitalType.TEMPERATURE: "°C",
}


def vital_label(vital: VitalType) -> str:
    return VITAL_LABELS[VitalType(vital)]


def vital_unit(vital: VitalType) -> str:
    return VITAL_UNITS[VitalType(vital)]
