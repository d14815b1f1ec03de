"""
mesh.py
-------

Mesh builder: turns the point field into triangles.

Triangulation itself is a capability behind the `Triangulator` interface;
the default implementation is scipy's Qhull-backed Delaunay. This module
only feeds points in, checks the boundary contract (at least 3 points,
3 distinct vertices per triangle) and hands triangles out as an
`(M, 3, 2)` array of vertex coordinates.
"""

from __future__ import annotations

__all__ = [
    "Triangulator",
    "DelaunayTriangulator",
    "triangulate",
    "centroid",
    "triangle_area",
]

import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial import Delaunay, QhullError

from .errors import GeometryError

LOGGER_NAME = "lowpoly"
MIN_POINTS = 3


class Triangulator(ABC):
    """Planar triangulation capability."""

    @abstractmethod
    def triangulate(self, points: ArrayLike) -> NDArray[np.float64]:
        """Return triangles covering the convex hull of `points`, shape (M, 3, 2)."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class DelaunayTriangulator(Triangulator):
    """Delaunay triangulation via `scipy.spatial.Delaunay`."""

    def __init__(self, qhull_options: Optional[str] = None) -> None:
        self.qhull_options = qhull_options

    def triangulate(self, points: ArrayLike) -> NDArray[np.float64]:
        pts = np.asarray(points)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise GeometryError(f"Expected an (N, 2) point array, got shape {pts.shape}")
        if len(pts) < MIN_POINTS:
            raise GeometryError(
                f"At least {MIN_POINTS} points are needed to triangulate, got {len(pts)}"
            )
        try:
            tri = Delaunay(pts, qhull_options=self.qhull_options)
        except (QhullError, ValueError) as e:
            raise GeometryError(f"Triangulation failed: {e}") from e

        triangles = pts[tri.simplices]
        for i, t in enumerate(triangles):
            if len({tuple(v) for v in t.tolist()}) != 3:
                raise GeometryError(f"Triangle {i} has repeated vertices: {t.tolist()}")
        return triangles


_default_triangulator = DelaunayTriangulator()


def triangulate(points: ArrayLike,
                triangulator: Optional[Triangulator] = None) -> NDArray[np.float64]:
    """Triangulate `points` with `triangulator` (Delaunay by default)."""
    triangulator = triangulator or _default_triangulator
    triangles = triangulator.triangulate(points)
    logging.getLogger(LOGGER_NAME).debug(
        f"{triangulator!r} produced {len(triangles)} triangles"
    )
    return triangles


def centroid(triangle: ArrayLike) -> Tuple[float, float]:
    """Arithmetic mean of the three vertices."""
    t = np.asarray(triangle, dtype=np.float64)
    x, y = t.mean(axis=0)
    return float(x), float(y)


def triangle_area(triangle: ArrayLike) -> float:
    """Unsigned area (shoelace formula)."""
    (x0, y0), (x1, y1), (x2, y2) = np.asarray(triangle, dtype=np.float64)
    return abs((x1 - x0) * (y2 - y0) - (x2 - x0) * (y1 - y0)) / 2.0
