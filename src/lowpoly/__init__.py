"""
lowpoly
-------

Triangulated gradient-mesh SVG backgrounds.

    >>> from lowpoly import PatternGenerator
    >>> pattern = PatternGenerator(cell_size=75).generate(1280, 720)
    >>> pattern.svg_string[:4]
    '<svg'
"""

from .errors import (
    PatternError,
    ConfigurationError,
    GeometryError,
    EnvironmentUnavailableError,
)
from .rng import RNG, get_rng, set_global_seed
from .palettes import PALETTES, get_palette, random_palette
from .config import PatternConfig, resolve_defaults
from .gradient import gradient_2d, linear_color_scale, brighten
from .points import generate_points, grid_shape
from .mesh import Triangulator, DelaunayTriangulator, triangulate
from .document import DocumentBuilder, Serializer, ElementTreeBuilder, ElementTreeSerializer
from .pattern import Pattern, PatternGenerator

__version__ = "0.1.0"

__all__ = [
    "PatternError",
    "ConfigurationError",
    "GeometryError",
    "EnvironmentUnavailableError",
    "RNG",
    "get_rng",
    "set_global_seed",
    "PALETTES",
    "get_palette",
    "random_palette",
    "PatternConfig",
    "resolve_defaults",
    "gradient_2d",
    "linear_color_scale",
    "brighten",
    "generate_points",
    "grid_shape",
    "Triangulator",
    "DelaunayTriangulator",
    "triangulate",
    "DocumentBuilder",
    "Serializer",
    "ElementTreeBuilder",
    "ElementTreeSerializer",
    "Pattern",
    "PatternGenerator",
]
