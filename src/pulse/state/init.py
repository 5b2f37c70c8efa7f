from __future__ import annotations

from typing import Iterable, List

from src.pulse.models.app_types import Patient
from src.pulse.scoring.severity import regime_from_status
from src.pulse.sim.engine import Simulator

N_PATIENTS: int = 5
NAMES = ["Kim Minsu", "Lee Seoyeon", "Park Jihun", "Choi Yujin", "Jung Doyun"]


def demo_roster(n: int = N_PATIENTS) -> List[Patient]:
    """Ward roster for the demo; everyone starts stable."""
    patients = []
    for i in range(1, n + 1):
        patients.append(
            Patient(
                id=f"p{i:02d}",
                name=NAMES[(i - 1) % len(NAMES)],
                bed_number=f"3{i:02d}-{'A' if i % 2 else 'B'}",
                status="stable",
            )
        )
    return patients


def bootstrap(simulator: Simulator, patients: Iterable[Patient]) -> None:
    """Seed each patient's vitals from its status hint and start ticking.

    No-op while the simulator is already running, so remounting a view
    does not wipe live trajectories.
    """
    simulator.start_if_stopped({p.id: regime_from_status(p.status) for p in patients})
