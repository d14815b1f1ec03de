"""
render.py
---------

Document assembler: triangles + gradient -> SVG element tree.

Stacking follows append order (later elements draw on top):

  1. root <svg width=.. height=..>
  2. optional noise <filter id="noise"> and a full-canvas <rect> using it
  3. one <path> per triangle, in triangulation order

Each triangle is filled and stroked with the gradient colour at its
centroid; stroking with the fill colour hides the hairline seams between
neighbours.
"""

from __future__ import annotations

__all__ = ["render", "format_number", "path_data", "NOISE_FILTER_ID"]

import logging
from numbers import Real
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import ArrayLike
from matplotlib import colors

from .config import PatternConfig
from .document import DocumentBuilder, ElementTreeBuilder
from .errors import EnvironmentUnavailableError
from .gradient import RGB
from .mesh import centroid

LOGGER_NAME = "lowpoly"

NOISE_FILTER_ID = "noise"
NOISE_BASE_FREQUENCY = 0.7
NOISE_OCTAVES = 3
# Contrast stretch applied to each turbulence channel.
NOISE_SLOPE = "2"
NOISE_INTERCEPT = "-.5"
# Average RGB into every channel, keep alpha.
GRAYSCALE_MATRIX = (
    "0.3333 0.3333 0.3333 0 0 \n"
    " 0.3333 0.3333 0.3333 0 0 \n"
    " 0.3333 0.3333 0.3333 0 0 \n"
    " 0 0 0 1 0"
)


def format_number(value: Real) -> str:
    """Compact attribute formatting: 300 -> '300', 0.5 -> '0.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def path_data(triangle: ArrayLike) -> str:
    """SVG path `d` for a closed triangle: 'Mx,yLx,yLx,yZ'."""
    return "M" + "L".join(
        f"{format_number(x)},{format_number(y)}" for x, y in np.asarray(triangle)
    ) + "Z"


def _append_noise(builder: DocumentBuilder, root: Any, intensity: float) -> None:
    noise = builder.append(root, "filter", {"id": NOISE_FILTER_ID})
    builder.append(noise, "feTurbulence", {
        "type": "fractalNoise",
        "in": "fillPaint",
        "fill": "#F00",
        "baseFrequency": format_number(NOISE_BASE_FREQUENCY),
        "numOctaves": str(NOISE_OCTAVES),
        "stitchTiles": "stitch",
    })
    transfer = builder.append(noise, "feComponentTransfer")
    for channel in ("feFuncR", "feFuncG", "feFuncB"):
        builder.append(transfer, channel, {
            "type": "linear",
            "slope": NOISE_SLOPE,
            "intercept": NOISE_INTERCEPT,
        })
    builder.append(noise, "feColorMatrix", {"type": "matrix", "values": GRAYSCALE_MATRIX})

    builder.append(root, "rect", {
        "opacity": format_number(intensity),
        "width": "100%",
        "height": "100%",
        "filter": f"url(#{NOISE_FILTER_ID})",
    })


def render(triangles: ArrayLike, color_at: Callable[[float, float], RGB],
           config: PatternConfig, width: float, height: float,
           builder: Optional[DocumentBuilder] = None) -> Any:
    """
    Assemble the pattern document.

    Args:
        triangles: `(M, 3, 2)` vertex array from the mesh builder.
        color_at:  Gradient function `(x, y) -> RGB`.
        config:    Resolved configuration (noise and opacities).
        width:     Canvas width, written on the root element.
        height:    Canvas height, written on the root element.
        builder:   Document capability; ElementTree when omitted.

    Returns:
        The root node produced by `builder`.
    """
    builder = builder or ElementTreeBuilder()
    if not isinstance(builder, DocumentBuilder):
        raise EnvironmentUnavailableError(
            f"{type(builder).__name__} does not provide document construction"
        )

    root = builder.create_root("svg", {
        "width": format_number(width),
        "height": format_number(height),
    })

    if config.noise_enabled:
        _append_noise(builder, root, config.noise_intensity)

    count = 0
    for triangle in triangles:
        c = colors.to_hex(color_at(*centroid(triangle)))
        attrs = {"d": path_data(triangle), "fill": c, "stroke": c}
        if config.fill_opacity != 1:
            attrs["fill-opacity"] = format_number(config.fill_opacity)
        if config.stroke_opacity != 1:
            attrs["stroke-opacity"] = format_number(config.stroke_opacity)
        builder.append(root, "path", attrs)
        count += 1

    logging.getLogger(LOGGER_NAME).debug(
        f"Rendered {count} paths (noise={'on' if config.noise_enabled else 'off'})"
    )
    return root
