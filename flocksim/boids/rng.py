"""
Random source for simulation initialization

A seeded xorshift32 generator so a run can be reproduced from its seed.
Randomness is only consumed when boids are created; update passes are
fully deterministic.
"""

import math
import random

from flocksim.config import MIN_INITIAL_SPEED
from .vector import Vector


class XorShift32:
    """Deterministic PRNG using xorshift32 algorithm."""

    def __init__(self, seed: int):
        self._state = (seed & 0xFFFFFFFF) or 1

    def next_uint32(self) -> int:
        x = self._state
        x ^= (x << 13) & 0xFFFFFFFF
        x ^= (x >> 17) & 0xFFFFFFFF
        x ^= (x << 5) & 0xFFFFFFFF
        self._state = x
        return x

    def next_float(self) -> float:
        """Random float in [0, 1)."""
        return self.next_uint32() * 2.3283064365386963e-10

    def next_float_range(self, lo: float, hi: float) -> float:
        """Random float in [lo, hi)."""
        return lo + self.next_float() * (hi - lo)


def generate_random_seed() -> int:
    """Generate a random seed value."""
    return random.randint(0, 0x7FFFFFFF)


def random_position(rng: XorShift32, width: float, height: float) -> Vector:
    """Uniform position in [0, width) x [0, height)."""
    return Vector(rng.next_float() * width, rng.next_float() * height)


def random_velocity(rng: XorShift32, max_speed: float) -> Vector:
    """Random direction with speed in [MIN_INITIAL_SPEED, max_speed)."""
    angle = rng.next_float_range(0.0, 2.0 * math.pi)
    # Caps below the minimum start every boid at max_speed
    speed = rng.next_float_range(min(MIN_INITIAL_SPEED, max_speed), max_speed)
    return Vector(math.cos(angle) * speed, math.sin(angle) * speed)


def random_acceleration(rng: XorShift32) -> Vector:
    """Uniform acceleration in [0, 1) x [0, 1)."""
    return Vector(rng.next_float(), rng.next_float())
