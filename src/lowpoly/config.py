"""
config.py
---------

Pattern configuration: an immutable, validated record resolved once per
generator, plus the defaults table applied to user options.

Defaults:

    cell_size        150
    bleed            resolved cell_size (unless given explicitly)
    cell_padding     10% of cell_size, or 15 if cell_size is falsy
    noise_intensity  0
    x_gradient       random_palette()
    y_gradient       x_gradient brightened by 0.5
    format           "svg"
    fill_opacity     1
    stroke_opacity   1
"""

from __future__ import annotations

__all__ = [
    "PatternConfig",
    "resolve_defaults",
    "check_dimensions",
    "DEFAULT_CELL_SIZE",
    "DEFAULT_CELL_PADDING",
    "NOISE_THRESHOLD",
]

import logging
import math
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from matplotlib import colors

from .errors import ConfigurationError
from .gradient import as_rgb, brighten
from .palettes import random_palette
from .rng import RNG

LOGGER_NAME = "lowpoly"

DEFAULT_CELL_SIZE = 150
DEFAULT_CELL_PADDING = 15
DEFAULT_FORMAT = "svg"
SUPPORTED_FORMATS = ("svg",)
Y_GRADIENT_BRIGHTEN = 0.5
# Noise at or below this intensity is imperceptible; the overlay is skipped.
NOISE_THRESHOLD = 0.01

# Option names accepted in addition to the dataclass field names.
OPTION_ALIASES: Dict[str, str] = {
    "cellsize": "cell_size",
    "cellSize": "cell_size",
    "cellpadding": "cell_padding",
    "cellPadding": "cell_padding",
    "noiseIntensity": "noise_intensity",
    "xGradient": "x_gradient",
    "yGradient": "y_gradient",
    "fillOpacity": "fill_opacity",
    "strokeOpacity": "stroke_opacity",
}


def _normalize_gradient(name: str, gradient: Sequence[Any]) -> Tuple[str, ...]:
    if isinstance(gradient, str) or not hasattr(gradient, "__len__"):
        raise ConfigurationError(
            f"{name} must be a sequence of colors, got {type(gradient).__name__}"
        )
    if len(gradient) == 0:
        raise ConfigurationError(f"{name} must contain at least one color")
    return tuple(colors.to_hex(as_rgb(c)) for c in gradient)


@dataclass(frozen=True)
class PatternConfig:
    """Validated generation parameters.

    Attributes:
        x_gradient:      Colours along the X axis (normalised to hex).
        y_gradient:      Colours along the Y axis; brightened `x_gradient`
                         when None.
        cell_size:       Grid pitch, > 0.
        bleed:           Margin the point field extends past every edge.
        cell_padding:    Inset inside each cell, < cell_size / 2.
        noise_intensity: Opacity of the noise overlay; <= 0.01 disables it.
        format:          Output kind, only "svg".
        fill_opacity:    Triangle fill opacity in [0, 1].
        stroke_opacity:  Triangle stroke opacity in [0, 1].
    """

    x_gradient: Tuple[str, ...]
    y_gradient: Optional[Tuple[str, ...]] = None
    cell_size: float = DEFAULT_CELL_SIZE
    bleed: float = DEFAULT_CELL_SIZE
    cell_padding: float = DEFAULT_CELL_PADDING
    noise_intensity: float = 0.0
    format: str = DEFAULT_FORMAT
    fill_opacity: float = 1.0
    stroke_opacity: float = 1.0

    def __post_init__(self) -> None:
        for field_name in ("cell_size", "bleed", "cell_padding", "noise_intensity",
                           "fill_opacity", "stroke_opacity"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigurationError(
                    f"{field_name} must be a real number, "
                    f"got {value!r} of type {type(value).__name__}"
                )
            if not math.isfinite(value):
                raise ConfigurationError(f"{field_name} must be finite, got {value}")

        if self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size}")
        if self.bleed < 0:
            raise ConfigurationError(f"bleed must be non-negative, got {self.bleed}")
        if self.cell_padding < 0:
            raise ConfigurationError(
                f"cell_padding must be non-negative, got {self.cell_padding}"
            )
        if self.cell_padding >= self.cell_size / 2:
            raise ConfigurationError(
                f"cell_padding ({self.cell_padding}) must be less than half of "
                f"cell_size ({self.cell_size})"
            )
        if self.noise_intensity < 0:
            raise ConfigurationError(
                f"noise_intensity must be non-negative, got {self.noise_intensity}"
            )
        for field_name in ("fill_opacity", "stroke_opacity"):
            value = getattr(self, field_name)
            if not 0 <= value <= 1:
                raise ConfigurationError(f"{field_name} must be in [0, 1], got {value}")
        if self.format not in SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported format {self.format!r}; expected one of {SUPPORTED_FORMATS}"
            )

        x_gradient = _normalize_gradient("x_gradient", self.x_gradient)
        if self.y_gradient is None:
            y_gradient = tuple(
                colors.to_hex(brighten(c, Y_GRADIENT_BRIGHTEN)) for c in x_gradient
            )
        else:
            y_gradient = _normalize_gradient("y_gradient", self.y_gradient)
        object.__setattr__(self, "x_gradient", x_gradient)
        object.__setattr__(self, "y_gradient", y_gradient)

    @property
    def noise_enabled(self) -> bool:
        return self.noise_intensity > NOISE_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _normalize_keys(options: Mapping[str, Any]) -> Dict[str, Any]:
    known = set(PatternConfig.__dataclass_fields__)
    out: Dict[str, Any] = {}
    for key, value in options.items():
        name = OPTION_ALIASES.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown option: {key!r}")
        out[name] = value
    return out


def resolve_defaults(options: Optional[Mapping[str, Any]] = None,
                     rng: Optional[RNG] = None, **kwargs: Any) -> PatternConfig:
    """
    Apply the defaults table to user options and validate the result.

    Options may use the field names (`cell_size`) or the camelCase /
    lowercase aliases (`cellSize`, `cellsize`). Explicit keyword arguments
    win over entries in `options`. `None` values count as "not supplied".

    `bleed` follows the resolved `cell_size` unless the caller sets it.

    Args:
        options: Mapping of option name to value.
        rng:     Random source for the default palette.

    Returns:
        PatternConfig: Frozen, validated configuration.

    Raises:
        ConfigurationError: Unknown option or invalid value.
    """
    opts = {
        k: v for k, v in _normalize_keys({**(options or {}), **kwargs}).items()
        if v is not None
    }

    cell_size = opts.get("cell_size", DEFAULT_CELL_SIZE)
    if "cell_padding" not in opts:
        opts["cell_padding"] = (
            0.1 * cell_size if cell_size and isinstance(cell_size, Real)
            else DEFAULT_CELL_PADDING
        )
    opts.setdefault("bleed", cell_size)
    opts["cell_size"] = cell_size
    if "x_gradient" not in opts:
        opts["x_gradient"] = random_palette(rng)

    config = PatternConfig(**opts)
    logging.getLogger(LOGGER_NAME).debug(f"Resolved config: {config}")
    return config


def check_dimensions(width: Any, height: Any) -> None:
    """Raise ConfigurationError unless both canvas dimensions are positive finite reals."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ConfigurationError(
                f"{name} must be a real number, got {type(value).__name__}"
            )
        if not math.isfinite(value):
            raise ConfigurationError(f"{name} must be finite, got {value}")
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")
