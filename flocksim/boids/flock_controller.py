"""
Flock Controller - Drives the simulation from a Qt timer

Connects:
- Simulation (flock state and frame pass)
- BoidSettings (captured once per run)
- UI consumers, via signals carrying positions and headings

Runs at FRAME_HZ via QTimer. Each tick measures elapsed wall time and
passes it to the simulation in frame units (1.0 at the nominal rate).
"""

import time
from typing import Optional
from PyQt5.QtCore import QObject, QTimer, pyqtSignal
from flocksim.utils.logger import logger

from flocksim.config import (
    FRAME_HZ,
    FRAME_DT,
    DEFAULT_BOID_COUNT,
    DEFAULT_WORLD_WIDTH,
    DEFAULT_WORLD_HEIGHT,
)
from .boid_settings import BoidSettings
from .rng import generate_random_seed
from .simulation import Simulation, UpdateMode


class FlockController(QObject):
    """
    Controller for a flock run.

    Owns the simulation lifecycle and frame cadence. Settings, bounds and
    boid count are read at start(); changing them applies to the next run.
    """

    # Signals for UI
    positions_updated = pyqtSignal(list)  # List of (x, y) tuples
    headings_updated = pyqtSignal(list)   # List of angles (radians)
    frame_advanced = pyqtSignal(int)
    seed_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)

    def __init__(self, settings: Optional[BoidSettings] = None,
                 boid_count: int = DEFAULT_BOID_COUNT,
                 width: float = DEFAULT_WORLD_WIDTH, height: float = DEFAULT_WORLD_HEIGHT,
                 update_mode: UpdateMode = UpdateMode.IN_PLACE, parent=None):
        super().__init__(parent)

        self._settings = settings if settings is not None else BoidSettings()
        self._boid_count = boid_count
        self._width = width
        self._height = height
        self._update_mode = update_mode

        self._seed: int = 0
        self._seed_locked = False

        self._simulation: Optional[Simulation] = None
        self._running = False
        self._last_tick: Optional[float] = None

        # Frame timer (~16ms = 60Hz)
        self._timer = QTimer(self)
        self._timer.setInterval(1000 // FRAME_HZ)
        self._timer.timeout.connect(self._tick)

    @property
    def simulation(self) -> Optional[Simulation]:
        """Access to the current run for visualization."""
        return self._simulation

    @property
    def settings(self) -> BoidSettings:
        return self._settings

    @property
    def running(self) -> bool:
        return self._running

    @property
    def seed(self) -> int:
        return self._seed

    # === Lifecycle ===

    def start(self) -> None:
        """Build a new simulation and start the frame timer."""
        if self._running:
            return

        if not self._seed_locked:
            self._seed = generate_random_seed()
        self.seed_changed.emit(self._seed)

        self._simulation = Simulation.initialize(
            self._boid_count, self._width, self._height,
            settings=self._settings, seed=self._seed, update_mode=self._update_mode,
        )

        self._last_tick = time.monotonic()
        self._timer.start()

        self._running = True
        self.running_changed.emit(True)

    def stop(self) -> None:
        """Stop the frame timer. The last simulation stays readable."""
        if not self._running:
            return

        self._timer.stop()
        self._last_tick = None

        self._running = False
        self.running_changed.emit(False)
        if self._simulation is not None:
            logger.info(f"Flock stopped after {self._simulation.frame} frames", component="SIM")

    def toggle(self) -> None:
        """Toggle running state."""
        if self._running:
            self.stop()
        else:
            self.start()

    def _tick(self) -> None:
        """Timer tick: advance by the elapsed time since the previous tick."""
        if not self._running:
            return

        now = time.monotonic()
        elapsed = now - self._last_tick if self._last_tick is not None else FRAME_DT
        self._last_tick = now

        self.advance(elapsed / FRAME_DT)

    def advance(self, delta: float) -> None:
        """Run one frame pass and publish the new state."""
        if self._simulation is None:
            logger.warning("Cannot advance flock: not started", component="SIM")
            return

        self._simulation.update_boids(delta)

        frame = self._simulation.frame
        if frame % FRAME_HZ == 0:
            logger.sim(f"Frame {frame}", details=f"delta={delta:.3f}")

        self.positions_updated.emit(self._simulation.get_positions())
        self.headings_updated.emit(self._simulation.get_headings())
        self.frame_advanced.emit(frame)

    # === Run configuration (applies at next start) ===

    def set_settings(self, settings: BoidSettings) -> None:
        self._settings = settings

    def set_boid_count(self, count: int) -> None:
        self._boid_count = count

    def set_bounds(self, width: float, height: float) -> None:
        """Set world size, e.g. from the viewport."""
        self._width = width
        self._height = height

    def set_update_mode(self, mode: UpdateMode) -> None:
        self._update_mode = mode

    # === Seed control ===

    def set_seed(self, seed: int) -> None:
        """Use a fixed seed for the following runs."""
        self._seed = seed
        self._seed_locked = True
        self.seed_changed.emit(self._seed)

    def set_seed_locked(self, locked: bool) -> None:
        """Lock/unlock seed for reproducible runs."""
        self._seed_locked = locked

    def reseed(self) -> None:
        """Generate a new random seed and restart if running."""
        self._seed = generate_random_seed()
        self.seed_changed.emit(self._seed)

        if self._running:
            self._simulation = Simulation.initialize(
                self._boid_count, self._width, self._height,
                settings=self._settings, seed=self._seed, update_mode=self._update_mode,
            )
