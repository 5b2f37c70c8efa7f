from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from src.pulse.config.settings import Settings
from src.pulse.models.app_types import (
    HISTORY_CAPACITY,
    VITAL_TYPES,
    Regime,
    Severity,
    VitalSample,
    VitalSignsBundle,
    VitalType,
    empty_bundle,
)
from src.pulse.scoring.severity import aggregate, regime_for
from src.pulse.sim.generation import advance, initialize_all_vitals, now_ms
from src.pulse.sim.history import append, latest_value

logger = logging.getLogger(__name__)

BundleView = Mapping[VitalType, Tuple[VitalSample, ...]]


class SimulationSession:
    """Patient -> vitals bundle map for one dashboard instance.

    Bundles are never mutated in place: writers build a new bundle and
    publish it with `put`, so a reader holding a bundle sees one consistent
    state for all five vitals.
    """

    def __init__(self) -> None:
        self._bundles: Dict[str, VitalSignsBundle] = {}
        self._lock = threading.Lock()

    def get(self, patient_id: str) -> Optional[BundleView]:
        with self._lock:
            bundle = self._bundles.get(patient_id)
        return None if bundle is None else MappingProxyType(bundle)

    def put(self, patient_id: str, bundle: VitalSignsBundle) -> None:
        # series longer than the window keep only their newest samples
        full = empty_bundle()
        full.update({VitalType(k): tuple(v)[-HISTORY_CAPACITY:] for k, v in bundle.items()})
        with self._lock:
            self._bundles[patient_id] = full

    def __contains__(self, patient_id: object) -> bool:
        with self._lock:
            return patient_id in self._bundles

    def __len__(self) -> int:
        with self._lock:
            return len(self._bundles)

    def patient_ids(self) -> List[str]:
        with self._lock:
            return list(self._bundles)

    def clear(self) -> None:
        with self._lock:
            self._bundles = {}

    def snapshot(self) -> Mapping[str, BundleView]:
        with self._lock:
            items = list(self._bundles.items())
        return MappingProxyType({pid: MappingProxyType(b) for pid, b in items})


class Simulator:
    """Drives periodic ticks over a roster of patients.

    State machine: stopped -> start(ids) -> running -> stop() -> stopped.
    Only this object writes to its session; one lock serialises ticks,
    initialisation and reset so a tick never interleaves with another write.
    """

    def __init__(
        self,
        session: Optional[SimulationSession] = None,
        settings: Optional[Settings] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.session = session if session is not None else SimulationSession()
        self.settings = settings if settings is not None else Settings()
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
        self.clock = clock

        self._write_lock = threading.RLock()
        self._control_lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._roster: Optional[Tuple[str, ...]] = None
        self._tick_count = 0

    # -- queries ---------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def roster(self) -> Tuple[str, ...]:
        if self._roster is not None:
            return self._roster
        return tuple(self.session.patient_ids())

    def get_bundle(self, patient_id: str) -> Optional[BundleView]:
        return self.session.get(patient_id)

    def severity_of(self, patient_id: str) -> Optional[Severity]:
        bundle = self.session.get(patient_id)
        if bundle is None:
            return None
        return aggregate(bundle)

    def snapshot(self) -> Mapping[str, BundleView]:
        return self.session.snapshot()

    # -- writes ----------------------------------------------------------

    def initialize_patient(self, patient_id: str, regime: Regime = Regime.NORMAL) -> None:
        """Replace the patient's vitals with a freshly generated history."""
        with self._write_lock:
            bundle = initialize_all_vitals(
                Regime(regime),
                rng=self.rng,
                now=self.clock(),
                count=self.settings.history_count,
                interval_ms=self.settings.history_interval_ms,
            )
            self.session.put(patient_id, bundle)

    def update_patient(self, patient_id: str) -> bool:
        """Advance all five vitals of one patient by one step.

        Returns False (and logs) when the patient has no vitals yet.
        """
        with self._write_lock:
            current = self.session.get(patient_id)
            if current is None:
                logger.warning("No vitals found for patient %s", patient_id)
                return False

            bias = regime_for(aggregate(current))
            ts = self.clock()

            updated: VitalSignsBundle = {}
            for vital in VITAL_TYPES:
                series = current[vital]
                if series:
                    ts = max(ts, series[-1].timestamp)
                value = advance(latest_value(series), vital, bias, self.rng)
                updated[vital] = append(series, VitalSample(timestamp=ts, value=value))

            self.session.put(patient_id, updated)
            return True

    def tick(self) -> None:
        with self._write_lock:
            roster = self.roster
            logger.debug("Tick %d over %d patients", self._tick_count + 1, len(roster))
            for pid in roster:
                self.update_patient(pid)
            self._tick_count += 1

    def reset(self) -> None:
        """Drop every bundle; the running/stopped state is left alone."""
        with self._write_lock:
            self.session.clear()
        logger.info("Simulation session cleared")

    # -- lifecycle -------------------------------------------------------

    def start(self, patient_ids: Iterable[str]) -> None:
        with self._control_lock:
            self._start(patient_ids)

    def start_if_stopped(self, regimes: Mapping[str, Regime]) -> bool:
        """Seed each patient with its regime and start, unless already running.

        The running check, seeding and start happen under one lock, so of two
        concurrent callers only one seeds and starts. Returns True if started.
        """
        with self._control_lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            for pid, regime in regimes.items():
                self.initialize_patient(pid, regime)
            self._start(regimes.keys())
            return True

    def _start(self, patient_ids: Iterable[str]) -> None:
        # caller holds _control_lock
        if self._thread is not None:
            self._halt()

        roster = tuple(dict.fromkeys(patient_ids))
        for pid in roster:
            if pid not in self.session:
                self.initialize_patient(pid, Regime.NORMAL)

        self._roster = roster
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="pulse-simulator",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Simulation started for %d patients (every %d ms)",
            len(roster),
            self.settings.tick_interval_ms,
        )

    def stop(self) -> None:
        with self._control_lock:
            if self._thread is None:
                return
            self._halt()
        logger.info("Simulation stopped after %d ticks", self._tick_count)

    def _halt(self) -> None:
        # caller holds _control_lock
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._stop_event = None

    def _run(self, stop_event: threading.Event) -> None:
        interval = self.settings.tick_interval_ms / 1000.0
        while not stop_event.wait(interval):
            with self._write_lock:
                if stop_event.is_set():
                    break
                try:
                    self.tick()
                except Exception:
                    logger.exception("Simulation tick failed")
