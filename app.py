import time
import logging

import numpy as np
import pandas as pd

from src.pulse.config.settings import configure_logging, load_settings
from src.pulse.models.app_types import Severity
from src.pulse.scoring.severity import count_by_severity
from src.pulse.sim.engine import Simulator
from src.pulse.state.init import bootstrap, demo_roster
from src.pulse.ui.frames import roster_frame

logger = logging.getLogger("pulse.app")

RUN_SECONDS = 30


def main(run_seconds: float = RUN_SECONDS) -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    sim = Simulator(settings=settings, rng=np.random.default_rng(settings.seed))
    bootstrap(sim, demo_roster())

    pd.set_option("display.width", 200)
    deadline = time.time() + run_seconds
    try:
        while time.time() < deadline:
            time.sleep(settings.tick_interval_ms / 1000.0)
            counts = count_by_severity(sim.severity_of(pid) for pid in sim.roster)
            logger.info(
                "tick %d: %d critical / %d warning / %d stable",
                sim.tick_count,
                counts[Severity.CRITICAL],
                counts[Severity.WARNING],
                counts[Severity.STABLE],
            )
            print(roster_frame(sim).round(1).to_string(index=False))
    finally:
        sim.stop()


if __name__ == "__main__":
    main()
