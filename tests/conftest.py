"""
-------
conftest.py
-------
Shared pytest fixtures for pattern tests.
"""

import logging

import pytest

from lowpoly.config import PatternConfig
from lowpoly.rng import RNG


# -----------------------------------------------------------------------------
# Random sources
# -----------------------------------------------------------------------------
@pytest.fixture
def seeded_rng() -> RNG:
  """Deterministic RNG with a fixed seed."""
  return RNG(seed=123)


# -----------------------------------------------------------------------------
# Configurations
# -----------------------------------------------------------------------------
@pytest.fixture
def two_tone() -> tuple:
  return ("#ff0000", "#0000ff")


@pytest.fixture
def scenario_config(two_tone) -> PatternConfig:
  """cell_size 150, bleed 150, padding 15, no noise: a 4x4 grid on 300x300."""
  return PatternConfig(
      x_gradient=two_tone,
      cell_size=150,
      bleed=150,
      cell_padding=15,
      noise_intensity=0,
  )


@pytest.fixture
def noisy_config(two_tone) -> PatternConfig:
  return PatternConfig(
      x_gradient=two_tone,
      cell_size=150,
      bleed=150,
      cell_padding=15,
      noise_intensity=0.5,
  )


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
@pytest.fixture
def clean_logger():
  """Remove handlers installed on the 'lowpoly' logger by a test."""
  logger = logging.getLogger("lowpoly")
  level = logger.level
  yield logger
  for h in list(logger.handlers):
    logger.removeHandler(h)
    h.close()
  logger.setLevel(level)
