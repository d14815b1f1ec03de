"""
test_palettes.py
----------------
Unit tests for the named palette catalog.
"""

import re

import pytest

from lowpoly.palettes import (
    CLASS_SIZES,
    FAMILY_NAMES,
    PALETTES,
    get_palette,
    random_palette,
)
from lowpoly.rng import RNG

HEX = re.compile(r"^#[0-9a-f]{6}$")


def test_catalog_shape():
  assert "YlGn" in PALETTES and "Spectral" in PALETTES
  for name, family in PALETTES.items():
    assert tuple(sorted(family)) == CLASS_SIZES
    for size, palette in family.items():
      assert len(palette) == size
      assert all(HEX.match(c) for c in palette)


def test_catalog_is_read_only():
  with pytest.raises(TypeError):
    PALETTES["Custom"] = {3: ("#000000",) * 3}
  with pytest.raises(TypeError):
    PALETTES["Blues"][3] = ("#000000",) * 3


def test_get_palette_defaults_to_largest():
  assert get_palette("Blues") == PALETTES["Blues"][max(CLASS_SIZES)]
  assert len(get_palette("Blues", 5)) == 5


def test_get_palette_unknown():
  with pytest.raises(KeyError):
    get_palette("NotAPalette")


def test_random_palette_comes_from_catalog():
  rng = RNG(seed=3)
  for _ in range(50):
    palette = random_palette(rng)
    assert any(palette in family.values() for family in PALETTES.values())


def test_random_palette_reproducible():
  assert random_palette(RNG(seed=11)) == random_palette(RNG(seed=11))


def test_random_palette_reaches_many_families():
  rng = RNG(seed=0)
  hits = set()
  for _ in range(400):
    palette = random_palette(rng)
    hits.update(n for n in FAMILY_NAMES if palette in PALETTES[n].values())
  assert len(hits) > len(FAMILY_NAMES) // 2
