"""Batch generation of pattern files across worker processes."""

from .config import BatchConfig

__all__ = ["BatchConfig"]
