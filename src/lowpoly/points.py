"""
points.py
---------

Jittered point field over the padded canvas.

The canvas plus `bleed` on every side is cut into a `cells_x x cells_y`
grid of `cell_size` squares. Each cell gets exactly one point, placed
uniformly at random inside the cell shrunk by `cell_padding` on every
side, then rounded to integer coordinates. Keeping points away from the
grid lines avoids sliver triangles where neighbours would otherwise line
up.
"""

from __future__ import annotations

__all__ = ["grid_shape", "cell_origin", "generate_points"]

import math
import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import PatternConfig, check_dimensions
from .errors import ConfigurationError
from .rng import RNG, get_rng

LOGGER_NAME = "lowpoly"


def grid_shape(config: PatternConfig, width: float, height: float) -> Tuple[int, int]:
    """Return `(cells_x, cells_y)` covering the canvas plus bleed."""
    cells_x = math.ceil((width + 2 * config.bleed) / config.cell_size)
    cells_y = math.ceil((height + 2 * config.bleed) / config.cell_size)
    return cells_x, cells_y


def cell_origin(config: PatternConfig, row: int, col: int) -> Tuple[float, float]:
    """Top-left corner of cell `(row, col)` in canvas coordinates."""
    return (-config.bleed + col * config.cell_size,
            -config.bleed + row * config.cell_size)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def generate_points(config: PatternConfig, width: float, height: float,
                    rng: Optional[RNG] = None) -> NDArray[np.int64]:
    """
    Scatter one jittered point per grid cell.

    Args:
        config: Resolved pattern configuration.
        width:  Canvas width, > 0.
        height: Canvas height, > 0.
        rng:    Random source; the shared RNG when omitted.

    Returns:
        Integer array of shape `(cells_x * cells_y, 2)`, cells in
        row-major order.

    Raises:
        ConfigurationError: Non-positive dimensions or
            `cell_padding >= cell_size / 2`. Checked before any random
            number is drawn.
    """
    check_dimensions(width, height)
    span = config.cell_size - 2 * config.cell_padding
    if span <= 0:
        raise ConfigurationError(
            f"cell_padding ({config.cell_padding}) leaves no room for points in "
            f"cells of size {config.cell_size}"
        )

    rng = rng or get_rng()
    cells_x, cells_y = grid_shape(config, width, height)
    points = np.empty((cells_x * cells_y, 2), dtype=np.int64)
    for d in range(cells_x * cells_y):
        row, col = divmod(d, cells_x)
        x0, y0 = cell_origin(config, row, col)
        x = x0 + config.cell_padding + rng.random() * span
        y = y0 + config.cell_padding + rng.random() * span
        points[d] = (_round_half_up(x), _round_half_up(y))

    logging.getLogger(LOGGER_NAME).debug(
        f"Generated {len(points)} points on a {cells_x}x{cells_y} grid"
    )
    return points
