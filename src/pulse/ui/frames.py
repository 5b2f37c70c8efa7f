from __future__ import annotations

from typing import Mapping, Optional

import pandas as pd

from src.pulse.models.app_types import VITAL_TYPES, VitalType
from src.pulse.scoring.severity import aggregate, classify_vital, severity_rank
from src.pulse.sim.engine import Simulator
from src.pulse.sim.history import latest, trend

BUNDLE_COLUMNS = ["vital", "timestamp", "time", "value", "severity"]
ROSTER_COLUMNS = ["patient_id", "status"] + [
    col for vital in VITAL_TYPES for col in (vital.value, f"{vital.value}_trend")
]


def bundle_frame(bundle: Optional[Mapping[VitalType, tuple]]) -> pd.DataFrame:
    """Long-format samples of one patient, ready for a line chart."""
    rows = []
    for vital in VITAL_TYPES:
        for s in (bundle or {}).get(vital, ()):
            rows.append({
                "vital": vital.value,
                "timestamp": s.timestamp,
                "value": float(s.value),
                "severity": classify_vital(s.value, vital).value,
            })

    if not rows:
        return pd.DataFrame(columns=BUNDLE_COLUMNS)

    df = pd.DataFrame(rows)
    df["time"] = pd.to_datetime(df["timestamp"], unit="ms")
    return df[BUNDLE_COLUMNS]


def roster_frame(simulator: Simulator) -> pd.DataFrame:
    """One row per patient: latest value and trend per vital plus overall status.

    Sorted critical first; patients with no vitals are left out.
    """
    rows = []
    snap = simulator.snapshot()
    for order, pid in enumerate(simulator.roster):
        bundle = snap.get(pid)
        if bundle is None:
            continue
        status = aggregate(bundle)
        row = {"patient_id": pid, "status": status.value, "_rank": severity_rank(status), "_order": order}
        for vital in VITAL_TYPES:
            row[vital.value] = latest(bundle[vital])
            row[f"{vital.value}_trend"] = trend(bundle[vital]).value
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=ROSTER_COLUMNS)

    df = pd.DataFrame(rows)
    df = df.sort_values(["_rank", "_order"], ascending=[False, True], kind="stable")
    return df[ROSTER_COLUMNS].reset_index(drop=True)
