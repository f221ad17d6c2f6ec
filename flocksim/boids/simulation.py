"""
Flock Simulation - Population and per-frame scheduling

Owns the ordered boid list, world bounds and the run's settings. One call
to update_boids() is one frame.

Update modes:
- IN_PLACE (default): boids are updated one after another against the
  live list, so boid i sees boids 0..i-1 already moved this frame and
  boids i+1..n-1 not yet moved. Results depend on list order.
- SNAPSHOT: every boid steers against a frame-start copy of the whole
  population, then all boids integrate. Results do not depend on order,
  but differ numerically from IN_PLACE.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from flocksim.config import MIN_BOID_COUNT
from flocksim.utils.logger import logger
from .boid import Boid
from .boid_settings import BoidSettings
from .rng import (
    XorShift32,
    generate_random_seed,
    random_position,
    random_velocity,
    random_acceleration,
)


class UpdateMode(Enum):
    """How a frame pass exposes neighbor state."""
    IN_PLACE = "in_place"
    SNAPSHOT = "snapshot"


class Simulation:
    """
    Fixed-size flock inside a width x height world.

    Build with Simulation.initialize() for a random flock, or pass
    explicit boids to the constructor.
    """

    def __init__(self, settings: BoidSettings, width: float, height: float,
                 boids: Sequence[Boid] = (), update_mode: UpdateMode = UpdateMode.IN_PLACE,
                 seed: Optional[int] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"World size must be positive, got {width}x{height}")

        self._settings = settings
        self._width = width
        self._height = height
        self._boids: List[Boid] = list(boids)
        self._update_mode = UpdateMode(update_mode)
        self._seed = seed
        self._frame = 0
        self._non_finite_reported = False

    @classmethod
    def initialize(cls, count: int, width: float, height: float,
                   settings: Optional[BoidSettings] = None, seed: Optional[int] = None,
                   update_mode: UpdateMode = UpdateMode.IN_PLACE) -> "Simulation":
        """
        Create count boids with random position, velocity and acceleration.

        The same seed always produces the same flock.
        """
        if count < MIN_BOID_COUNT:
            raise ValueError(f"Boid count must be >= {MIN_BOID_COUNT}, got {count}")
        if settings is None:
            settings = BoidSettings()
        if seed is None:
            seed = generate_random_seed()

        rng = XorShift32(seed)
        boids = []
        for _ in range(count):
            boids.append(Boid(
                position=random_position(rng, width, height),
                velocity=random_velocity(rng, settings.max_speed),
                acceleration=random_acceleration(rng),
                settings=settings,
                width=width,
                height=height,
            ))

        sim = cls(settings, width, height, boids, update_mode=update_mode, seed=seed)
        logger.info(f"Initialized {count} boids in {width}x{height} world", component="SIM",
                    details=f"seed={seed}, mode={sim.update_mode.value}")
        return sim

    # === Frame update ===

    def update_boids(self, delta: float) -> None:
        """Advance every boid by one frame of length delta."""
        if self._update_mode is UpdateMode.SNAPSHOT:
            self._update_snapshot(delta)
        else:
            self._update_in_place(delta)

        self._frame += 1
        self._check_finite()

    def _update_in_place(self, delta: float) -> None:
        boids = self._boids
        for boid in boids:
            boid.update(boids, delta)

    def _update_snapshot(self, delta: float) -> None:
        frozen = [boid.copy() for boid in self._boids]
        # Each copy excludes itself by identity and steers from frame-start state
        steers = [copy.steering(frozen) for copy in frozen]
        for boid, steer in zip(self._boids, steers):
            boid.integrate(steer, delta)

    def _check_finite(self) -> None:
        if self._non_finite_reported:
            return
        bad = self.non_finite_count()
        if bad:
            self._non_finite_reported = True
            logger.warning(f"{bad} boid(s) have non-finite state at frame {self._frame}",
                           component="SIM")
            first = next(i for i, b in enumerate(self._boids) if not b.is_finite())
            logger.boid(first, "first non-finite", details=repr(self._boids[first]))

    # === Accessors ===

    @property
    def boids(self) -> Tuple[Boid, ...]:
        return tuple(self._boids)

    @property
    def count(self) -> int:
        return len(self._boids)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def settings(self) -> BoidSettings:
        return self._settings

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def frame(self) -> int:
        """Number of completed update passes."""
        return self._frame

    @property
    def update_mode(self) -> UpdateMode:
        return self._update_mode

    def non_finite_count(self) -> int:
        return sum(1 for b in self._boids if not b.is_finite())

    def get_positions(self) -> List[Tuple[float, float]]:
        """Current boid positions for visualization."""
        return [b.position.as_tuple() for b in self._boids]

    def get_velocities(self) -> List[Tuple[float, float]]:
        return [b.velocity.as_tuple() for b in self._boids]

    def get_headings(self) -> List[float]:
        """Sprite rotation per boid."""
        return [b.heading for b in self._boids]

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Positions and velocities as (n, 2) float64 arrays.

        Returns:
            (positions, velocities)
        """
        n = len(self._boids)
        positions = np.empty((n, 2), dtype=np.float64)
        velocities = np.empty((n, 2), dtype=np.float64)
        for i, b in enumerate(self._boids):
            positions[i] = (b.position.x, b.position.y)
            velocities[i] = (b.velocity.x, b.velocity.y)
        return positions, velocities

    def headings_array(self) -> np.ndarray:
        _, velocities = self.as_arrays()
        return np.arctan2(velocities[:, 1], velocities[:, 0]) + np.pi * 0.5
