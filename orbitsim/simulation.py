"""A sun with orbiting planets under mutual gravity."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from orbitsim.body import CelestialBody, Color

SUN_MASS = 1000.0
SUN_RADIUS = 1.5
SUN_COLOR: Color = (0.0, 0.0, 0.0, 1.0)

DEFAULT_PLANETS: tuple[tuple[float, float, float, Color], ...] = (
    (4.0, 0.0, 0.3, (0.2, 0.7, 0.9, 1.0)),
    (7.0, math.pi / 3.0, 0.4, (0.8, 0.4, 0.2, 1.0)),
    (10.0, math.pi * 2.0 / 3.0, 0.35, (0.3, 0.8, 0.3, 1.0)),
    (13.0, math.pi, 0.5, (0.9, 0.2, 0.2, 1.0)),
    (16.0, math.pi * 4.0 / 3.0, 0.25, (0.6, 0.6, 0.8, 1.0)),
)


@dataclass(frozen=True)
class OrbitParameters:
    distance: float
    speed: float
    angle: float
    inclination: float


def _planet_mass(radius: float) -> float:
    return radius * radius * radius * 10.0


def _orbit_state(
    distance: float, angle: float, speed: float, inclination: float
) -> tuple[np.ndarray, np.ndarray]:
    position = np.array(
        [
            distance * math.cos(angle),
            distance * math.sin(inclination),
            distance * math.sin(angle),
        ]
    )
    velocity = np.array(
        [
            -speed * math.sin(angle),
            speed * math.cos(inclination) * 0.1,
            speed * math.cos(angle),
        ]
    )
    return position, velocity


class GravitySimulation:
    """The set of bodies and the rules that advance them.

    The first body is always the sun; it is the light source when drawn.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.bodies: list[CelestialBody] = []
        self.time = 0.0
        self.reset()

    def __len__(self) -> int:
        return len(self.bodies)

    @property
    def light_position(self) -> np.ndarray:
        return self.bodies[0].position.copy() if self.bodies else np.zeros(3)

    def update(self, delta_time: float, gravity_strength: float) -> None:
        self.time += delta_time * 0.5
        for body in self.bodies:
            body.update(self.bodies, delta_time, gravity_strength)
        for first, second in combinations(self.bodies, 2):
            if first.check_collision(second):
                first.resolve_collision(second)

    def random_orbit_parameters(self, gravity_strength: float = 1.0) -> OrbitParameters:
        distance = self.rng.uniform(3.0, 15.0)
        speed = math.sqrt(gravity_strength * SUN_MASS / distance)
        angle = self.rng.uniform(0.0, 2.0 * math.pi)
        inclination = self.rng.uniform(-0.3, 0.3)
        return OrbitParameters(distance, speed, angle, inclination)

    def add_random_planet(self) -> CelestialBody:
        orbit = self.random_orbit_parameters()
        position, velocity = _orbit_state(
            orbit.distance, orbit.angle, orbit.speed, orbit.inclination
        )
        radius = self.rng.uniform(0.2, 0.6)

        if self.rng.random() > 0.5:
            blue = 0.5 + self.rng.random() * 0.5
            green = 0.3 + self.rng.random() * 0.7
            color: Color = (0.0, green, blue, 1.0)
        else:
            red = 0.7 + self.rng.random() * 0.3
            green = 0.2 + self.rng.random() * 0.3
            color = (red, green, 0.1, 1.0)

        body = CelestialBody(radius, color, position, velocity, _planet_mass(radius))
        self.bodies.append(body)
        return body

    def add_planet_with_params(
        self, distance: float, angle: float, radius: float, color: Color
    ) -> CelestialBody:
        """Add a planet on a roughly circular orbit around the sun."""
        if distance <= 0:
            raise ValueError("orbit distance must be positive")
        speed = math.sqrt(1.0 * SUN_MASS / distance)
        inclination = self.rng.uniform(-0.2, 0.2)
        position, velocity = _orbit_state(distance, angle, speed, inclination)
        body = CelestialBody(radius, color, position, velocity, _planet_mass(radius))
        self.bodies.append(body)
        return body

    def reset(self) -> None:
        """Restore the sun and the five starting planets."""
        self.bodies = [
            CelestialBody(SUN_RADIUS, SUN_COLOR, (0, 0, 0), (0, 0, 0), SUN_MASS)
        ]
        for distance, angle, radius, color in DEFAULT_PLANETS:
            self.add_planet_with_params(distance, angle, radius, color)