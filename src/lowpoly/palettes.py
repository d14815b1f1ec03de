"""
palettes.py
-----------

Fixed catalog of named colour palettes used for random gradients.

The catalog follows the ColorBrewer schemes shipped with matplotlib:
one family per scheme, one concrete palette per class count (3-9),
each palette a tuple of `#rrggbb` strings sampled evenly along the
scheme's colormap. Qualitative schemes are left out; they do not read
well as a continuous mesh gradient.

The table is built once at import and exposed read-only.
"""

from __future__ import annotations

__all__ = [
    "SEQUENTIAL_FAMILIES",
    "DIVERGING_FAMILIES",
    "PALETTES",
    "FAMILY_NAMES",
    "get_palette",
    "random_palette",
]

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
import matplotlib
from matplotlib import colors

from .rng import RNG, get_rng

LOGGER_NAME = "lowpoly"

SEQUENTIAL_FAMILIES: Tuple[str, ...] = (
    "YlGn", "YlGnBu", "GnBu", "BuGn", "PuBuGn", "PuBu", "BuPu", "RdPu",
    "PuRd", "OrRd", "YlOrRd", "YlOrBr", "Purples", "Blues", "Greens",
    "Oranges", "Reds", "Greys",
)
DIVERGING_FAMILIES: Tuple[str, ...] = (
    "PuOr", "BrBG", "PRGn", "PiYG", "RdBu", "RdGy", "RdYlBu", "Spectral",
    "RdYlGn",
)
CLASS_SIZES: Tuple[int, ...] = tuple(range(3, 10))

Palette = Tuple[str, ...]


def _sample_scheme(name: str, size: int) -> Palette:
    cmap = matplotlib.colormaps[name]
    return tuple(colors.to_hex(rgba) for rgba in cmap(np.linspace(0.0, 1.0, size)))


def _build_catalog() -> Mapping[str, Mapping[int, Palette]]:
    catalog = {}
    for name in SEQUENTIAL_FAMILIES + DIVERGING_FAMILIES:
        catalog[name] = MappingProxyType(
            {size: _sample_scheme(name, size) for size in CLASS_SIZES}
        )
    return MappingProxyType(catalog)


# =============================================================================
# Catalog (read-only, process-wide)
# =============================================================================
PALETTES: Mapping[str, Mapping[int, Palette]] = _build_catalog()
FAMILY_NAMES: Tuple[str, ...] = tuple(PALETTES)


def get_palette(name: str, size: Optional[int] = None) -> Palette:
    """Return the palette `name` with `size` classes (largest if omitted).

    Raises:
        KeyError: Unknown family or class count.
    """
    family = PALETTES[name]
    if size is None:
        size = max(family)
    return family[size]


def random_palette(rng: Optional[RNG] = None) -> Palette:
    """Pick a family uniformly, then a class count uniformly within it."""
    rng = rng or get_rng()
    name = FAMILY_NAMES[rng.randrange(len(FAMILY_NAMES))]
    sizes = tuple(sorted(PALETTES[name]))
    size = sizes[rng.randrange(len(sizes))]
    logging.getLogger(LOGGER_NAME).debug(f"Random palette: {name}[{size}]")
    return PALETTES[name][size]
