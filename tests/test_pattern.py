"""
test_pattern.py
---------------
End-to-end generation: scenarios, serialization round-trip, encodings,
host attachment and failure modes.
"""

import base64
import json
import threading
import xml.etree.ElementTree as ET

import numpy as np
import pytest

from lowpoly.config import PatternConfig
from lowpoly.document import SVG_NS, DocumentBuilder, Serializer, local_name
from lowpoly.errors import (
    ConfigurationError,
    EnvironmentUnavailableError,
    GeometryError,
)
from lowpoly.mesh import Triangulator
from lowpoly.pattern import DATA_URI_PREFIX, Pattern, PatternGenerator
from lowpoly.rng import RNG


def tags(root):
  return [local_name(e.tag) for e in root.iter()]


@pytest.fixture
def scenario_pattern(scenario_config):
  return Pattern(scenario_config, 300, 300, rng=RNG(seed=42))


@pytest.fixture
def noisy_pattern(noisy_config):
  return Pattern(noisy_config, 300, 300, rng=RNG(seed=42))


# ---------------------------------------------------------------------------
# 1. Scenarios
# ---------------------------------------------------------------------------

def test_scenario_without_noise(scenario_pattern):
  p = scenario_pattern
  assert len(p.points) == 16
  parsed = ET.fromstring(p.svg_string)
  found = tags(parsed)
  assert found.count("svg") == 1
  assert found.count("filter") == 0
  assert found.count("path") == len(p.polys) >= 1
  for path in parsed.iter(f"{{{SVG_NS}}}path"):
    assert path.get("fill")
    assert path.get("fill") == path.get("stroke")


def test_scenario_with_noise(noisy_pattern):
  parsed = ET.fromstring(noisy_pattern.svg_string)
  top = [local_name(c.tag) for c in parsed]
  assert top.count("filter") == 1
  assert top.count("rect") == 1
  assert top.index("filter") < top.index("rect") < top.index("path")
  assert set(top[2:]) == {"path"}
  rect = parsed[1]
  assert rect.get("opacity") == "0.5"
  assert rect.get("filter") == "url(#noise)"


def test_bad_padding_fails_before_points():
  with pytest.raises(ConfigurationError):
    PatternGenerator(cell_size=150, cell_padding=75, x_gradient=["red"]).generate(300, 300)


@pytest.mark.parametrize("width, height", [(0, 300), (300, -1)])
def test_bad_dimensions(scenario_config, width, height):
  with pytest.raises(ConfigurationError):
    Pattern(scenario_config, width, height)


def test_single_cell_is_a_geometry_error():
  gen = PatternGenerator(cell_size=100, bleed=0, x_gradient=["red"], rng=RNG(seed=1))
  with pytest.raises(GeometryError):
    gen.generate(10, 10)


def test_config_type_checked():
  with pytest.raises(ConfigurationError):
    Pattern({"cell_size": 150}, 300, 300)


# ---------------------------------------------------------------------------
# 2. Serialization
# ---------------------------------------------------------------------------

def test_markup_declares_namespace_and_size(scenario_pattern):
  s = scenario_pattern.svg_string
  assert s.startswith("<svg")
  assert f'xmlns="{SVG_NS}"' in s
  assert 'width="300"' in s and 'height="300"' in s


@pytest.mark.parametrize("fixture", ["scenario_pattern", "noisy_pattern"])
def test_roundtrip_matches_tree(request, fixture):
  p = request.getfixturevalue(fixture)
  original = list(p.svg.iter())
  parsed = list(ET.fromstring(p.svg_string).iter())
  assert len(parsed) == len(original)
  for a, b in zip(original, parsed):
    assert a.tag == b.tag
    assert a.attrib == b.attrib


def test_element_count(noisy_pattern):
  # root + filter subtree (filter, turbulence, transfer, 3 funcs, matrix) + rect + paths
  assert len(list(noisy_pattern.svg.iter())) == 1 + 7 + 1 + len(noisy_pattern.polys)


def test_serialization_is_idempotent(scenario_pattern):
  assert scenario_pattern.serialize() == scenario_pattern.serialize()
  assert scenario_pattern.serialize() == scenario_pattern.svg_string


def test_encodings(scenario_pattern):
  p = scenario_pattern
  assert base64.b64decode(p.base64).decode("utf-8") == p.svg_string
  assert p.data_uri == DATA_URI_PREFIX + p.base64
  assert p.data_uri.startswith("data:image/svg+xml;base64,")
  assert p.data_url == f"url({p.data_uri})"


def test_custom_serializer():
  class CountingSerializer(Serializer):
    calls = 0

    def serialize(self, node):
      CountingSerializer.calls += 1
      return "<svg/>"

  p = Pattern(PatternConfig(x_gradient=["red"]), 300, 300, rng=RNG(seed=1),
              serializer=CountingSerializer())
  assert p.svg_string == "<svg/>"
  assert CountingSerializer.calls == 1


def test_missing_serializer_capability(scenario_config):
  with pytest.raises(EnvironmentUnavailableError):
    Pattern(scenario_config, 300, 300, serializer=object())


def test_missing_builder_capability(scenario_config):
  with pytest.raises(EnvironmentUnavailableError):
    Pattern(scenario_config, 300, 300, builder=object())


def test_builder_serializer_mismatch(scenario_config):
  class ListBuilder(DocumentBuilder):
    def create_root(self, tag, attrs=None):
      return [tag]

    def append(self, parent, tag, attrs=None):
      parent.append([tag])
      return parent[-1]

  with pytest.raises(EnvironmentUnavailableError):
    Pattern(scenario_config, 300, 300, rng=RNG(seed=1), builder=ListBuilder())


def test_markup_uses_unprefixed_tags(noisy_pattern):
  s = noisy_pattern.svg_string
  assert "ns0:" not in s and "svg:" not in s
  assert "<path " in s and "<feTurbulence " in s


# ---------------------------------------------------------------------------
# 3. Determinism and seams
# ---------------------------------------------------------------------------

def test_seeded_generators_are_reproducible():
  a = PatternGenerator(rng=RNG(seed=8)).generate(400, 250)
  b = PatternGenerator(rng=RNG(seed=8)).generate(400, 250)
  assert a.svg_string == b.svg_string
  assert a.options == b.options


def test_reseed_replays_points(scenario_config):
  gen = PatternGenerator(scenario_config.to_dict(), rng=RNG(seed=1))
  gen.reseed(99)
  a = gen.generate(300, 300)
  gen.reseed(99)
  b = gen.generate(300, 300)
  assert np.array_equal(a.points, b.points)
  assert a.svg_string == b.svg_string


def test_custom_triangulator(scenario_config):
  class FirstThree(Triangulator):
    def triangulate(self, points):
      return np.asarray(points)[None, :3]

  p = Pattern(scenario_config, 300, 300, rng=RNG(seed=3), triangulator=FirstThree())
  assert len(p.polys) == 1
  assert tags(p.svg).count("path") == 1


def test_concurrent_generation_matches_sequential(scenario_config):
  expected = [Pattern(scenario_config, 300, 300, rng=RNG(seed=s)).svg_string
              for s in range(4)]
  results = [None] * 4

  def build(seed):
    results[seed] = Pattern(scenario_config, 300, 300, rng=RNG(seed=seed)).svg_string

  threads = [threading.Thread(target=build, args=(s,)) for s in range(4)]
  for t in threads:
    t.start()
  for t in threads:
    t.join()
  assert results == expected


# ---------------------------------------------------------------------------
# 4. Host attachment, saving and metadata
# ---------------------------------------------------------------------------

def test_append_to_host(scenario_pattern):
  body = ET.Element("body")
  assert scenario_pattern.append(body) is body
  assert body[0] is scenario_pattern.svg


@pytest.mark.parametrize("host", [None, object(), "body"])
def test_append_without_host(scenario_pattern, host):
  with pytest.raises(EnvironmentUnavailableError):
    scenario_pattern.append(host)


def test_save(tmp_path, scenario_pattern):
  out = scenario_pattern.save(tmp_path / "bg.svg")
  assert out.read_text(encoding="utf-8") == scenario_pattern.svg_string


def test_meta_and_json(noisy_pattern):
  meta = noisy_pattern.meta
  assert meta["width"] == 300 and meta["height"] == 300
  assert meta["points"] == 16
  assert meta["triangles"] == len(noisy_pattern.polys)
  assert meta["noise"] is True
  assert json.loads(noisy_pattern.json)["config"]["noise_intensity"] == 0.5
  assert "triangles=" in repr(noisy_pattern)
