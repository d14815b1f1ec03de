"""
gradient.py
-----------

Two-axis colour gradient used to colour mesh triangles.

Each axis is an independent piecewise-linear colour scale: a gradient of
`n` colours is pinned to `n` evenly spaced stops at `i * extent / n`
(i = 0 .. n-1) and interpolated per RGB channel. Coordinates outside the
stops (e.g. triangles in the bleed margin) clamp to the nearest stop
colour. The colour at `(x, y)` is the 50/50 RGB blend of the X-scale
colour at `x` and the Y-scale colour at `y`.

Colours are RGB float triples in [0, 1], the matplotlib convention;
inputs may be any matplotlib colour spec.
"""

from __future__ import annotations

__all__ = [
    "RGB",
    "as_rgb",
    "brighten",
    "interpolate_rgb",
    "linear_color_scale",
    "gradient_2d",
]

from typing import Any, Callable, Sequence, Tuple

import numpy as np
from matplotlib import colors

from .errors import ConfigurationError

RGB = Tuple[float, float, float]
ColorScale = Callable[[float], RGB]

# d3's rgb.brighter(): channels below this floor (0-255) are lifted first.
BRIGHTER_FLOOR = 30.0
BRIGHTER_BASE = 0.7


def as_rgb(color: Any) -> RGB:
    """Convert any matplotlib colour spec to an RGB float triple."""
    try:
        return tuple(float(c) for c in colors.to_rgb(color))
    except ValueError as e:
        raise ConfigurationError(f"Invalid color: {color!r}") from e


def brighten(color: Any, k: float = 1.0) -> RGB:
    """Return a brighter copy of `color`.

    Channels are scaled by `1 / 0.7**k` in 0-255 space and clipped at 255.
    Non-zero channels below 30 are lifted to 30 first so dark colours
    still brighten visibly; pure black becomes rgb(30, 30, 30).
    """
    rgb = np.asarray(as_rgb(color)) * 255.0
    if not rgb.any():
        return (BRIGHTER_FLOOR / 255.0,) * 3
    lifted = np.where((rgb > 0) & (rgb < BRIGHTER_FLOOR), BRIGHTER_FLOOR, rgb)
    out = np.minimum(255.0, lifted / BRIGHTER_BASE ** k)
    return tuple(float(c) for c in out / 255.0)


def interpolate_rgb(a: Any, b: Any, t: float) -> RGB:
    """Linear RGB interpolation, `t=0` -> `a`, `t=1` -> `b`."""
    ca, cb = np.asarray(as_rgb(a)), np.asarray(as_rgb(b))
    return tuple(float(c) for c in np.clip(ca + (cb - ca) * t, 0.0, 1.0))


def linear_color_scale(gradient: Sequence[Any], extent: float) -> ColorScale:
    """
    Build a 1D colour scale over `[0, extent)`.

    Args:
        gradient: Non-empty ordered sequence of colours.
        extent:   Length of the axis (canvas width or height), > 0.

    Returns:
        Callable mapping a coordinate to an RGB triple. A single-colour
        gradient returns that colour everywhere.

    Raises:
        ConfigurationError: Empty gradient or non-positive extent.
    """
    if len(gradient) == 0:
        raise ConfigurationError("Gradient must contain at least one color")
    if extent <= 0:
        raise ConfigurationError(f"Gradient extent must be positive, got {extent}")

    stops = np.array([as_rgb(c) for c in gradient], dtype=np.float64)
    if len(stops) == 1:
        constant: RGB = tuple(float(c) for c in stops[0])
        return lambda value: constant

    domain = np.arange(len(stops), dtype=np.float64) * (extent / len(stops))

    def scale(value: float) -> RGB:
        return tuple(float(np.interp(value, domain, stops[:, ch])) for ch in range(3))

    return scale


def gradient_2d(x_gradient: Sequence[Any], y_gradient: Sequence[Any],
                width: float, height: float) -> Callable[[float, float], RGB]:
    """Return `color_at(x, y)` blending the X and Y scales 50/50."""
    color_x = linear_color_scale(x_gradient, width)
    color_y = linear_color_scale(y_gradient, height)

    def color_at(x: float, y: float) -> RGB:
        return interpolate_rgb(color_x(x), color_y(y), 0.5)

    return color_at
