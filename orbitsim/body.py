"""Celestial bodies with Newtonian attraction and elastic-ish collisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterable

import numpy as np

from orbitsim.mesh import SphereMesh, generate_sphere

Color = tuple[float, float, float, float]

MIN_INTERACTION_DISTANCE = 0.1
RESTITUTION = 0.8
_COINCIDENT_OFFSET = 0.001


def _vector(values) -> np.ndarray:
    return np.array(values, dtype=np.float64).reshape(3)


@dataclass(eq=False)
class CelestialBody:
    """A spherical body with mass moving under gravity."""

    radius: float
    color: Color
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    mass: float = 1.0

    def __post_init__(self) -> None:
        self.color = tuple(float(c) for c in self.color)
        self.position = _vector(self.position)
        self.velocity = _vector(self.velocity)

    def mesh_detail(self) -> int:
        """Number of latitude and longitude bands used for this body's mesh."""
        return int(max(10.0, min(30.0, self.radius * 5.0)))

    @cached_property
    def mesh(self) -> SphereMesh:
        detail = self.mesh_detail()
        return generate_sphere(self.radius, detail, detail)

    def update(
        self,
        bodies: Iterable[CelestialBody],
        delta_time: float,
        gravity_strength: float,
    ) -> None:
        """Accelerate towards every other body, then move by the new velocity."""
        for other in bodies:
            if other is self:
                continue
            direction = other.position - self.position
            distance = float(np.linalg.norm(direction))
            if distance < MIN_INTERACTION_DISTANCE:
                continue
            force = gravity_strength * self.mass * other.mass / (distance * distance)
            acceleration = direction / distance * (force / self.mass)
            self.velocity = self.velocity + acceleration * delta_time
        self.position = self.position + self.velocity * delta_time

    def check_collision(self, other: CelestialBody) -> bool:
        distance = float(np.linalg.norm(other.position - self.position))
        return distance < self.radius + other.radius

    def resolve_collision(self, other: CelestialBody) -> None:
        """Push two overlapping bodies apart and exchange an impulse."""
        direction = other.position - self.position
        distance = float(np.linalg.norm(direction))
        if distance == 0.0:
            direction = np.array([_COINCIDENT_OFFSET, 0.0, 0.0])
            distance = _COINCIDENT_OFFSET
        normal = direction / distance

        overlap = (self.radius + other.radius) - distance
        self.position = self.position - normal * (overlap * 0.5)
        other.position = other.position + normal * (overlap * 0.5)

        relative_velocity = other.velocity - self.velocity
        along_normal = float(np.dot(relative_velocity, normal))
        if along_normal > 0:
            return

        impulse_scalar = -(1.0 + RESTITUTION) * along_normal
        impulse_scalar /= (1.0 / self.mass) + (1.0 / other.mass)
        impulse = normal * impulse_scalar
        self.velocity = self.velocity - impulse / self.mass
        other.velocity = other.velocity + impulse / other.mass