"""
config.py - Configuration dataclass for batch pattern generation.

Multiprocessing machinery pickles it, passes it to each pool worker's
initializer, and every PatternWorker reads it from there.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..errors import ConfigurationError


@dataclass(frozen=True)
class BatchConfig:
    """Immutable configuration passed to each worker process.

    Attributes:
        logger_level:    Level for the "lowpoly" logger in every process.
        img_size:        Canvas (width, height) of every pattern.
        output_dir:      Directory receiving SVG files and the manifest.
        log_dir:         Directory for per-process log files; None disables
                         file logging.
        seed:            Base seed; job `i` uses `seed + i`. None draws a
                         fresh seed per worker process.
        pattern_options: Options forwarded to PatternGenerator.
    """
    logger_level: int = logging.INFO
    img_size: Tuple[int, int] = (1920, 1080)
    output_dir: Path = Path("./out")
    log_dir: Optional[Path] = Path("./logs")
    seed: Optional[int] = None
    pattern_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        width, height = self.img_size
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"img_size must be positive, got {self.img_size}")
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        self.output_dir.mkdir(parents=True, exist_ok=True)
