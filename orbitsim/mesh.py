"""UV-sphere mesh generation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class SphereMesh:
    """Vertex positions, unit normals and triangle indices of a UV sphere."""

    radius: float
    latitude_bands: int
    longitude_bands: int
    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def interleaved(self) -> np.ndarray:
        """Return an (N, 6) float32 array of position and normal per vertex."""
        return np.hstack([self.positions, self.normals]).astype(np.float32)


def generate_sphere(
    radius: float = 1.0, latitude_bands: int = 20, longitude_bands: int = 20
) -> SphereMesh:
    """Build a sphere from latitude and longitude bands.

    Vertices run pole to pole, each ring holding ``longitude_bands + 1``
    vertices so the seam is duplicated; each quad yields two triangles.
    """
    if latitude_bands < 1 or longitude_bands < 1:
        raise ValueError("a sphere needs at least one latitude and one longitude band")

    theta = np.arange(latitude_bands + 1) * np.pi / latitude_bands
    phi = np.arange(longitude_bands + 1) * 2.0 * np.pi / longitude_bands
    t, p = np.meshgrid(theta, phi, indexing="ij")

    normals = np.stack(
        [np.cos(p) * np.sin(t), np.cos(t), np.sin(p) * np.sin(t)], axis=-1
    ).reshape(-1, 3)
    positions = normals * radius

    ring = longitude_bands + 1
    first = (
        np.arange(latitude_bands)[:, None] * ring + np.arange(longitude_bands)[None, :]
    ).ravel()
    second = first + ring
    indices = (
        np.stack([first, second, first + 1, second, second + 1, first + 1], axis=1)
        .ravel()
        .astype(np.uint32)
    )

    return SphereMesh(
        radius=radius,
        latitude_bands=latitude_bands,
        longitude_bands=longitude_bands,
        positions=positions.astype(np.float32),
        normals=normals.astype(np.float32),
        indices=indices,
    )