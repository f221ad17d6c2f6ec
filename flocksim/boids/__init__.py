"""
Boid Flocking Simulation

Agents steer by separation, alignment and cohesion against neighbors in
vision range, plus containment inside the world and a pull toward its
center, with a speed cap.
"""

from .vector import Vector
from .boid_settings import BoidSettings, InvalidSettingsError, load_settings
from .boid import Boid
from .rng import XorShift32, generate_random_seed
from .simulation import Simulation, UpdateMode
from .flock_controller import FlockController

__all__ = [
    'Vector',
    'BoidSettings',
    'InvalidSettingsError',
    'load_settings',
    'Boid',
    'XorShift32',
    'generate_random_seed',
    'Simulation',
    'UpdateMode',
    'FlockController',
]
