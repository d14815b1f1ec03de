"""
worker.py
---------

Per-process pattern worker used by orchestration.py.

Responsibilities:
- own a thread-safe RNG for this process
- seed it per job (deterministic when the batch has a base seed)
- build a PatternGenerator per job, so each image gets its own palette
- save the SVG and return (path, json)
"""

import os
import json
import time
import logging
from pathlib import Path
from typing import Tuple, Union

from ..pattern import PatternGenerator
from ..rng import RNG
from .config import BatchConfig

PathLike = Union[str, os.PathLike]
LOGGER_NAME = "lowpoly"


class PatternWorker:
    """Generates and saves one pattern per job."""

    def __init__(self, config: BatchConfig) -> None:
        self.pid = os.getpid()
        self.logger = logging.getLogger(LOGGER_NAME)
        self.config = config
        self.rng = RNG()
        self.seed = None
        self.logger.info(f"Initialized PatternWorker PID-{self.pid}")

    def _seed_rng(self, index: int) -> None:
        if self.config.seed is None:
            self.seed = self.pid ^ int(time.time() * 1e6) ^ index
        else:
            self.seed = self.config.seed + index
        self.rng.seed(self.seed)
        self.logger.debug(f"Worker PID={self.pid} job {index} seeded RNG with {self.seed}")

    def run(self, index: int, output_path: PathLike) -> Tuple[Path, str]:
        """Generate pattern `index`, write it to `output_path`, return (path, json_str)."""
        self._seed_rng(index)
        generator = PatternGenerator(self.config.pattern_options, rng=self.rng)
        pattern = generator.generate(*self.config.img_size)
        out = pattern.save(output_path)
        meta = {
            "pid": self.pid,
            "seed": self.seed,
            "index": index,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
            "pattern": pattern.meta,
        }
        return out, json.dumps(meta, ensure_ascii=False, default=str)
