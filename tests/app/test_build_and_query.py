# tests/app/test_build_and_query.py
import json
import logging

import pytest
from pydantic import ValidationError

from osm_router.app.build import build
from osm_router.app.hooks import NoopHooks
from osm_router.app.query import RouteQueryService
from osm_router.config.models import ScenarioModel
from osm_router.domain.entities.records import MapFeed, NodeRecord, WayRecord
from osm_router.domain.errors import EmptyNetworkError, UnknownPlaceError
from osm_router.io.query_events import RouteComputedEvent, RouteFailedEvent
from osm_router.io.query_logging import QueryLogging, _JsonFormatter
from osm_router.io.recorder import MemorySink, Recorder


def _cfg(path, **over):
    cfg = {"name": "test", "run_id": "t-1", "map": {"file": str(path)}}
    cfg.update(over)
    return cfg


@pytest.fixture
def library_cafe_feed():
    return MapFeed(
        nodes=[
            NodeRecord(1, 0.0, 0.0),
            NodeRecord(2, 0.0, 0.001),
            NodeRecord(3, 0.0, 0.002),
            NodeRecord(10, 0.0, 0.0, tags=(("name", "Library"),)),
            NodeRecord(11, 0.0, 0.002, tags=(("name", "Cafe"),)),
        ],
        ways=[WayRecord(refs=(1, 2), tags=(("highway", "residential"),)),
              WayRecord(refs=(2, 3), tags=(("highway", "residential"),))],
    )


def test_end_to_end_library_to_cafe(library_cafe_feed):
    app = build(_cfg("unused.osm"), feed=library_cafe_feed, use_logging=False)
    rep = app.queries.route_between("Library", "Cafe")
    assert (rep.source_node, rep.target_node) == (1, 3)
    want = app.network.weight(1, 2) + app.network.weight(2, 3)
    assert rep.result.total_weight == pytest.approx(want, rel=1e-6)
    assert rep.result.path == (1, 2, 3)
    assert rep.direct_distance_m == pytest.approx(want, rel=1e-6)
    assert rep.detour_pct == pytest.approx(0.0, abs=1e-6)


def test_build_from_osm_file(osm_file):
    app = build(_cfg(osm_file), use_logging=False)
    assert app.network.node_count == 8
    assert app.network.edge_count == 3
    assert [p.name for p in app.places] == ["Library", "Cafe", "Island", "Main Street", "Depot"]


def test_no_path_is_reported_with_diagnostics(osm_file):
    app = build(_cfg(osm_file), use_logging=False)
    rep = app.queries.route_between("Library", "Island")
    assert not rep.found
    assert rep.road_distance_m is None and rep.detour_pct is None
    assert rep.target_node == 20
    diag = rep.diagnostics
    assert diag.component_size == 3
    assert diag.target_reachable is False


def test_probe_can_be_switched_off(osm_file):
    app = build(_cfg(osm_file, routing={"probe_on_failure": False, "reconstruct_path": False}), use_logging=False)
    assert app.queries.route_between(0, 2).diagnostics.component_size is None
    assert app.queries.route_between(0, 1).result.path is None


def test_same_place_twice_has_zero_cost(osm_file):
    app = build(_cfg(osm_file), use_logging=False)
    rep = app.queries.route_between("Cafe", "Cafe")
    assert rep.result.total_weight == 0.0
    assert rep.detour_pct is None


def test_unknown_place(osm_file):
    app = build(_cfg(osm_file), use_logging=False)
    with pytest.raises(UnknownPlaceError):
        app.queries.route_between("Library", "Museum")


def test_advisory_distance_is_in_kilometers(osm_file):
    app = build(_cfg(osm_file), use_logging=False)
    km = app.queries.advisory_distance_km("Library", "Cafe")
    assert km == pytest.approx(0.2223899, rel=1e-5)
    assert km * 1000 == pytest.approx(app.queries.route_between("Library", "Cafe").direct_distance_m)


def test_empty_network_surfaces_error_and_logs_it(caplog):
    feed = MapFeed(nodes=[NodeRecord(1, 0.0, 0.0, tags=(("name", "Lonely"),))])
    app = build(_cfg("unused.osm"), feed=feed)
    assert [p.name for p in app.places] == ["Lonely"]
    with caplog.at_level(logging.ERROR, logger="osm_router"):
        with pytest.raises(EmptyNetworkError):
            app.queries.route_between("Lonely", "Lonely")
    assert any(r.getMessage() == "query_error" for r in caplog.records)


def test_recorder_collects_one_event_per_query(osm_file):
    app = build(_cfg(osm_file, recorder={"kind": "memory"}))
    app.queries.route_between("Library", "Cafe")
    app.queries.route_between("Library", "Island")
    sink = app.recorder.sinks[0]
    events = sink.events
    assert [type(e) for e in events] == [RouteComputedEvent, RouteFailedEvent]
    assert [e.seq for e in events] == [1, 2]
    assert sink.failed()[0].target_reachable is False
    assert sink.computed()[0].destination == "Cafe"
    assert app.recorder.counts == {"RouteComputed": 1, "RouteFailed": 1}


def test_jsonl_recorder_appends_to_file(osm_file, tmp_path):
    out = tmp_path / "events.jsonl"
    app = build(_cfg(osm_file, recorder={"kind": "jsonl", "path": str(out)}))
    app.queries.route_between("Library", "Cafe")
    app.queries.route_between("Cafe", "Library")
    rows = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [r["name"] for r in rows] == ["RouteComputed", "RouteComputed"]
    assert rows[1]["source"] == "Cafe"


def test_query_logging_emits_json_lines():
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(self.format(record))

    logger = logging.getLogger("osm_router.test_json")
    logger.propagate = False
    h = _Collect()
    h.setFormatter(_JsonFormatter())
    logger.addHandler(h)
    logger.setLevel("INFO")

    hooks = QueryLogging(run_id="r-9", logger=logger, recorder=Recorder(MemorySink()))
    hooks.build_end(nodes=3, edges=2, road_ways=1, skipped_pairs=0, places=2)
    payload = json.loads(records[-1])
    assert payload["msg"] == "build_end"
    assert payload["run_id"] == "r-9"
    assert payload["edges"] == 2


def test_service_defaults_to_noop_hooks(library_cafe_feed):
    app = build(_cfg("unused.osm"), feed=library_cafe_feed, use_logging=False)
    svc = RouteQueryService(app.network, app.places)
    assert isinstance(svc.hooks, NoopHooks)
    assert svc.route_between(0, 1).found


def test_config_validation():
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({"name": "x", "map": {"file": "a.osm"}, "extra": 1})
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({"name": "x", "map": {"file": "a.osm"}, "routing": {"road_tag": " "}})
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({"name": "x", "map": {"file": "a.osm", "fmt": "pbf"}})
    m = ScenarioModel.model_validate({"name": "x", "map": {"file": "~/a.osm"}})
    assert not m.map.file.startswith("~")
    assert m.recorder.kind == "none"
