# tests/conftest.py
import pytest

# Two road islands: 1-2-3 (with a ref outside the extract) and 20-21.
SAMPLE_OSM = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="tests">
  <node id="1" lat="0.0" lon="0.0"/>
  <node id="2" lat="0.0" lon="0.001"/>
  <node id="3" lat="0.0" lon="0.002"/>
  <node id="10" lat="0.0" lon="0.0"><tag k="name" v="Library"/></node>
  <node id="11" lat="0.0" lon="0.002"><tag k="amenity" v="cafe"/><tag k="name" v="Cafe"/></node>
  <node id="20" lat="1.0" lon="1.0"/>
  <node id="21" lat="1.0" lon="1.001"/>
  <node id="22" lat="1.0" lon="1.0004"><tag k="name" v="Island"/></node>
  <way id="100">
    <nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="999"/>
    <tag k="highway" v="residential"/><tag k="name" v="Main Street"/>
  </way>
  <way id="101">
    <nd ref="20"/><nd ref="21"/>
    <tag k="highway" v="service"/>
  </way>
  <way id="102">
    <nd ref="21"/><nd ref="20"/><nd ref="22"/><nd ref="21"/>
    <tag k="building" v="yes"/><tag k="name" v="Depot"/>
  </way>
  <relation id="5">
    <member type="way" ref="100" role=""/>
    <tag k="name" v="Bus 1"/>
  </relation>
</osm>
"""


@pytest.fixture
def osm_file(tmp_path):
    p = tmp_path / "sample.osm"
    p.write_text(SAMPLE_OSM, encoding="utf-8")
    return p
