"""
Vector - Immutable 2D vector for boid kinematics

Every operation returns a new Vector. Division follows IEEE-754: dividing
by zero yields +/-inf or nan per component instead of raising, so numeric
edge cases in the flocking rules propagate as non-finite values.
"""

import math
from dataclasses import dataclass
from typing import Tuple


def _div(a: float, s: float) -> float:
    """IEEE-754 float division (Python raises on zero, floats do not)."""
    try:
        return a / s
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, s)


@dataclass(frozen=True)
class Vector:
    """2D vector value. Equality is structural."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def mult(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    def div(self, scalar: float) -> "Vector":
        return Vector(_div(self.x, scalar), _div(self.y, scalar))

    def get_mag(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector":
        """Unit vector; a zero vector normalizes to (nan, nan)."""
        return self.div(self.get_mag())

    def normalize_or_zero(self, eps: float = 0.0) -> "Vector":
        """Unit vector, or the zero vector when magnitude <= eps."""
        mag = self.get_mag()
        if not mag > eps:
            return Vector.zero()
        return Vector(self.x / mag, self.y / mag)

    def distance(self, other: "Vector") -> float:
        return self.sub(other).get_mag()

    def heading(self) -> float:
        """Facing angle for a sprite pointing up: atan2(y, x) + pi/2."""
        return math.atan2(self.y, self.x) + math.pi * 0.5

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    __add__ = add
    __sub__ = sub
    __mul__ = mult
    __rmul__ = mult
    __truediv__ = div
