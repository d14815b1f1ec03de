"""
rng.py
------

Thread-safe random source shared by the point field and palette picker.

- Wraps either `random.Random` or `numpy.random.Generator`.
- Every call is serialized through a lock, so one instance may be
  shared between threads.
- Pass an explicit seed for reproducible patterns; without one the seed
  is mixed from PID, clock and the stdlib entropy pool.
"""

from __future__ import annotations

__all__ = ["RNGBackend", "RNG", "get_rng", "set_global_seed"]

import os
import time
import random
import threading
from typing import Any, Optional, Sequence, TypeAlias, Union

import numpy as np

# ---------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------
RNGBackend: TypeAlias = Union[random.Random, np.random.Generator, "RNG"]


def _entropy_seed() -> int:
    return os.getpid() ^ (time.time_ns() & 0xFFFFFFFF) ^ random.getrandbits(32)


# ---------------------------------------------------------------------
# RNG class
# ---------------------------------------------------------------------
class RNG:
    """Encapsulated, thread-safe hybrid random generator.

    Attributes:
        _rng:  Backend RNG (random.Random or numpy.random.Generator).
        _lock: threading.Lock for safe concurrent access.
    """

    def __init__(self, seed: Optional[int] = None, use_numpy: bool = False):
        self._lock = threading.Lock()
        self._use_numpy = use_numpy
        self._rng: RNGBackend = self._make_backend(
            seed if seed is not None else _entropy_seed()
        )

    def _make_backend(self, seed_val: int) -> RNGBackend:
        if self._use_numpy:
            return np.random.default_rng(seed_val)
        return random.Random(seed_val)

    # -----------------------------------------------------------------
    # Core seeding
    # -----------------------------------------------------------------
    def seed(self, seed: Optional[int] = None) -> None:
        """Reinitialize the RNG in place (preserves object identity)."""
        with self._lock:
            seed_val = seed if seed is not None else _entropy_seed()
            if self._use_numpy:
                self._rng = np.random.default_rng(seed_val)
            else:
                self._rng.seed(seed_val)

    # -----------------------------------------------------------------
    # Scalar random methods
    # -----------------------------------------------------------------
    def random(self) -> float:
        """Uniform float in [0, 1)."""
        with self._lock:
            if self._use_numpy:
                return float(self._rng.random())
            return self._rng.random()

    def uniform(self, a: float = 0.0, b: float = 1.0) -> float:
        with self._lock:
            if self._use_numpy:
                return float(self._rng.uniform(a, b))
            return self._rng.uniform(a, b)

    def randrange(self, stop: int) -> int:
        """Uniform index in [0, stop)."""
        if stop <= 0:
            raise ValueError(f"randrange() needs a positive stop, got {stop}")
        with self._lock:
            if self._use_numpy:
                return int(self._rng.integers(0, stop))
            return self._rng.randrange(stop)

    def choice(self, seq: Sequence[Any]) -> Any:
        """Pick one element of `seq` by uniform random index."""
        return seq[self.randrange(len(seq))]

    # -----------------------------------------------------------------
    # Utility & Introspection
    # -----------------------------------------------------------------
    def getstate(self):
        with self._lock:
            if self._use_numpy:
                return self._rng.bit_generator.state
            return self._rng.getstate()

    def setstate(self, state) -> None:
        with self._lock:
            if self._use_numpy:
                self._rng.bit_generator.state = state
            else:
                self._rng.setstate(state)

    def __repr__(self) -> str:
        backend = "numpy" if self._use_numpy else "stdlib"
        return f"<RNG backend={backend} pid={os.getpid()} id={id(self)}>"


# =============================================================================
# GLOBAL & THREAD-LOCAL ACCESSORS
# =============================================================================
_global_rng = RNG()
_thread_local = threading.local()


def get_rng(thread_safe: bool = False, use_numpy: bool = False) -> RNG:
    """Return an RNG instance (shared or per-thread)."""
    if thread_safe:
        if not hasattr(_thread_local, "rng"):
            _thread_local.rng = RNG(use_numpy=use_numpy)
        return _thread_local.rng
    return _global_rng


def set_global_seed(seed: int) -> None:
    """Re-seed the shared RNG used when no generator is injected."""
    _global_rng.seed(seed)
