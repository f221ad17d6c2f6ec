"""
Boid - One flocking agent

Each frame a boid blends five steering contributions into its acceleration:
- Pull toward the world center, stronger the farther away it is
- Containment push away from edges closer than contain_padding
- Alignment with neighbor velocities
- Separation from neighbors (inverse-square)
- Cohesion toward the neighbors' mean position

Neighbors are every other boid within vision_radius (inclusive), found by
scanning the whole population. Numeric edge cases (zero-length normalize,
coincident boids) yield nan/inf unless settings.guard_zero_division is set.
"""

from typing import List, Sequence

from flocksim.config import EPS
from .boid_settings import BoidSettings
from .vector import Vector


class Boid:
    """Kinematic state of one agent plus the rules that steer it."""

    def __init__(self, position: Vector, velocity: Vector, acceleration: Vector,
                 settings: BoidSettings, width: float, height: float):
        self.position = position
        self.velocity = velocity
        self.acceleration = acceleration
        self.settings = settings
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return (f"Boid(position=({self.position.x:.3f}, {self.position.y:.3f}), "
                f"velocity=({self.velocity.x:.3f}, {self.velocity.y:.3f}))")

    # === Frame update ===

    def update(self, population: Sequence["Boid"], delta: float) -> None:
        """Steer against population, then integrate over delta."""
        self.integrate(self.steering(population), delta)

    def steering(self, population: Sequence["Boid"]) -> Vector:
        """Sum of the five force-weighted steering contributions."""
        neighbors = self.neighbors(population)
        return (self.pull_center()
                .add(self.contain())
                .add(self._align(neighbors))
                .add(self._separate(neighbors))
                .add(self._cohesion(neighbors)))

    def integrate(self, steer: Vector, delta: float) -> None:
        """Apply steer to acceleration, cap velocity, advance position."""
        if self.settings.carry_acceleration:
            self.acceleration = self.acceleration.add(steer)
        else:
            self.acceleration = steer
        self.velocity = self.cap_speed(self.velocity.add(self.acceleration), self.settings.max_speed)
        self.position = self.position.add(self.velocity.mult(delta))

    def cap_speed(self, vec: Vector, max_speed: float) -> Vector:
        if vec.get_mag() > max_speed:
            return vec.normalize().mult(max_speed)
        return vec

    # === Steering rules ===

    def neighbors(self, population: Sequence["Boid"]) -> List["Boid"]:
        """Other boids within vision_radius, in population order."""
        vision = self.settings.vision_radius
        return [
            other for other in population
            if other is not self and self.position.distance(other.position) <= vision
        ]

    def pull_center(self) -> Vector:
        center = Vector(self.width / 2, self.height / 2)
        dist = self.position.distance(center)
        desired = self._normalize(center.sub(self.position)).mult(self.settings.max_speed)
        steer = desired.sub(self.velocity)
        return (self._normalize(steer)
                .mult(self.settings.pull_force)
                .mult(dist * self.settings.center_force))

    def contain(self) -> Vector:
        """
        Push away from every edge closer than contain_padding.

        contain_force is applied after each triggered edge, so in a corner
        the first push is scaled twice.
        """
        padding = self.settings.contain_padding
        force = self.settings.contain_force
        x, y = self.position.x, self.position.y

        steer = Vector.zero()
        if x - padding < 0:
            steer = steer.add(Vector(1, 0)).mult(force)
        if x + padding > self.width:
            steer = steer.add(Vector(-1, 0)).mult(force)
        if y - padding < 0:
            steer = steer.add(Vector(0, 1)).mult(force)
        if y + padding > self.height:
            steer = steer.add(Vector(0, -1)).mult(force)
        return steer

    def align(self, population: Sequence["Boid"]) -> Vector:
        return self._align(self.neighbors(population))

    def separate(self, population: Sequence["Boid"]) -> Vector:
        return self._separate(self.neighbors(population))

    def cohesion(self, population: Sequence["Boid"]) -> Vector:
        return self._cohesion(self.neighbors(population))

    def _align(self, neighbors: List["Boid"]) -> Vector:
        if not neighbors:
            return Vector.zero()
        total = Vector.zero()
        for other in neighbors:
            total = total.add(other.velocity)
        return self._steer_toward(total.div(len(neighbors)), self.settings.align_force)

    def _separate(self, neighbors: List["Boid"]) -> Vector:
        if not neighbors:
            return Vector.zero()
        total = Vector.zero()
        for other in neighbors:
            dist = self.position.distance(other.position)
            if self.settings.guard_zero_division and dist <= EPS:
                continue
            # Inverse-square: diff / dist^2
            total = total.add(self.position.sub(other.position).div(dist * dist))
        return self._steer_toward(total.div(len(neighbors)), self.settings.separation_force)

    def _cohesion(self, neighbors: List["Boid"]) -> Vector:
        if not neighbors:
            return Vector.zero()
        total = Vector.zero()
        for other in neighbors:
            total = total.add(other.position)
        offset = total.div(len(neighbors)).sub(self.position)
        return self._steer_toward(offset, self.settings.cohesion_force)

    def _steer_toward(self, direction: Vector, weight: float) -> Vector:
        """Reynolds steering: desired velocity at max_speed minus current, reweighted."""
        desired = self._normalize(direction).mult(self.settings.max_speed)
        steer = desired.sub(self.velocity)
        return self._normalize(steer).mult(self.settings.pull_force).mult(weight)

    def _normalize(self, vec: Vector) -> Vector:
        if self.settings.guard_zero_division:
            return vec.normalize_or_zero(EPS)
        return vec.normalize()

    # === Presentation helpers ===

    @property
    def heading(self) -> float:
        """Facing angle for an up-pointing sprite."""
        return self.velocity.heading()

    def is_finite(self) -> bool:
        return self.position.is_finite() and self.velocity.is_finite()

    def copy(self) -> "Boid":
        """Detached copy of the kinematic state, sharing settings."""
        return Boid(self.position, self.velocity, self.acceleration,
                    self.settings, self.width, self.height)
