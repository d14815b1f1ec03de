"""
pattern.py
----------

Pattern generator and the generated Pattern artifact.

A `Pattern` is computed completely inside its constructor:

    validate -> points -> triangles -> SVG tree -> text -> base64 -> data URI

and is not modified afterwards. `PatternGenerator` resolves options once
and stamps out patterns of any size with the same styling.

Example:
    >>> gen = PatternGenerator({"cell_size": 75, "noise_intensity": 0.3})
    >>> pattern = gen.generate(800, 600)
    >>> css = f"background-image: {pattern.data_url};"
"""

from __future__ import annotations

__all__ = ["Pattern", "PatternGenerator", "DATA_URI_PREFIX"]

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .config import PatternConfig, check_dimensions, resolve_defaults
from .document import (
    DocumentBuilder,
    ElementTreeBuilder,
    ElementTreeSerializer,
    Serializer,
    encode_payload,
)
from .errors import ConfigurationError, EnvironmentUnavailableError
from .gradient import gradient_2d
from .mesh import Triangulator, triangulate
from .points import generate_points
from .render import render
from .rng import RNG, get_rng

LOGGER_NAME = "lowpoly"
DATA_URI_PREFIX = "data:image/svg+xml;base64,"

PathLike = Union[str, os.PathLike]


class Pattern:
    """
    Generated triangle-mesh background.

    Attributes:
        options:    PatternConfig used for generation.
        width:      Canvas width.
        height:     Canvas height.
        points:     `(N, 2)` jittered point field.
        polys:      `(M, 3, 2)` triangles.
        svg:        Root of the in-memory document tree.
        svg_string: Serialized SVG markup.
        base64:     Base64 payload of `svg_string`.
        data_uri:   `data:image/svg+xml;base64,...`
        data_url:   `url(<data_uri>)`, ready for a CSS property value.
    """

    def __init__(self, config: PatternConfig, width: float, height: float,
                 rng: Optional[RNG] = None,
                 triangulator: Optional[Triangulator] = None,
                 builder: Optional[DocumentBuilder] = None,
                 serializer: Optional[Serializer] = None) -> None:
        if not isinstance(config, PatternConfig):
            raise ConfigurationError(
                f"config must be a PatternConfig, not {type(config).__name__}"
            )
        check_dimensions(width, height)
        builder = builder or ElementTreeBuilder()
        serializer = serializer or ElementTreeSerializer()
        if not isinstance(builder, DocumentBuilder):
            raise EnvironmentUnavailableError(
                f"{type(builder).__name__} does not provide document construction"
            )
        if not isinstance(serializer, Serializer):
            raise EnvironmentUnavailableError(
                f"{type(serializer).__name__} does not provide serialization"
            )

        self.options = config
        self.width = width
        self.height = height
        self._serializer = serializer

        self.points = generate_points(config, width, height, rng)
        self.polys = triangulate(self.points, triangulator)
        color_at = gradient_2d(config.x_gradient, config.y_gradient, width, height)
        self.svg = render(self.polys, color_at, config, width, height, builder)

        self.svg_string = self.serialize()
        self.base64 = encode_payload(self.svg_string)
        self.data_uri = DATA_URI_PREFIX + self.base64
        self.data_url = f"url({self.data_uri})"

        logging.getLogger(LOGGER_NAME).debug(
            f"Pattern {width}x{height}: {len(self.points)} points, "
            f"{len(self.polys)} triangles, {len(self.svg_string)} chars"
        )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    def serialize(self) -> str:
        """Serialize the in-memory document tree (same text on every call)."""
        return self._serializer.serialize(self.svg)

    def append(self, host: Any = None) -> Any:
        """
        Attach the document tree to a host page element (e.g. a `<body>`).

        Raises:
            EnvironmentUnavailableError: No host, or the host cannot take
                child nodes.
        """
        if host is None:
            raise EnvironmentUnavailableError("No host document to append the pattern to")
        if not callable(getattr(host, "append", None)):
            raise EnvironmentUnavailableError(
                f"Host {type(host).__name__} cannot take child nodes"
            )
        host.append(self.svg)
        return host

    def save(self, output_path: PathLike) -> Path:
        """Write the SVG markup to `output_path` and return the path."""
        out = Path(output_path)
        out.write_text(self.svg_string, encoding="utf-8")
        return out

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------
    @property
    def meta(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "points": len(self.points),
            "triangles": len(self.polys),
            "noise": self.options.noise_enabled,
            "config": self.options.to_dict(),
        }

    @property
    def json(self) -> str:
        """JSON-encoded metadata string (sorted, compact)."""
        return json.dumps(self.meta, sort_keys=True, separators=(",", ":"), default=str)

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__} {self.width}x{self.height} "
                f"triangles={len(self.polys)}>")


class PatternGenerator:
    """
    Resolves options once and generates patterns.

    Args:
        options:      Option mapping (see `lowpoly.config`).
        rng:          Random source for the palette and point jitter;
                      a per-thread RNG when omitted.
        triangulator: Triangulation capability (Delaunay by default).
        builder:      Document capability (ElementTree by default).
        serializer:   Serialization capability (ElementTree by default).
        **kwargs:     Options given as keywords; override `options`.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None,
                 rng: Optional[RNG] = None,
                 triangulator: Optional[Triangulator] = None,
                 builder: Optional[DocumentBuilder] = None,
                 serializer: Optional[Serializer] = None,
                 **kwargs: Any) -> None:
        self.rng = rng or get_rng(thread_safe=True)
        self.triangulator = triangulator
        self.builder = builder
        self.serializer = serializer
        self.options = resolve_defaults(options, rng=self.rng, **kwargs)

    def generate(self, width: float, height: float) -> Pattern:
        return Pattern(self.options, width, height, rng=self.rng,
                       triangulator=self.triangulator, builder=self.builder,
                       serializer=self.serializer)

    def reseed(self, seed: Optional[int] = None) -> None:
        """Re-seed the point-jitter RNG (for deterministic replay)."""
        self.rng.seed(seed)
