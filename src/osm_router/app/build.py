# osm_router/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from osm_router.app.hooks import NoopHooks
from osm_router.app.protocols import RouteHooks
from osm_router.app.query import RouteQueryService
from osm_router.config.models import RecorderUnion, ScenarioModel
from osm_router.domain.entities.geography import NamedPlace
from osm_router.domain.entities.network import RoadNetwork
from osm_router.domain.entities.records import MapFeed
from osm_router.domain.routing.routing_builder import NetworkBuilder
from osm_router.domain.routing.routing_places import extract_places
from osm_router.io.query_logging import QueryLogging  # JSON logs
from osm_router.io.recorder import JsonlSink, MemorySink, Recorder
from osm_router.runtime.resources import load_feed


@dataclass
class App:
    network: RoadNetwork
    places: list[NamedPlace]
    queries: RouteQueryService
    hooks: RouteHooks
    recorder: Recorder | None = None


def _make_recorder(cfg: RecorderUnion) -> Recorder | None:
    if cfg.kind == "jsonl":
        return Recorder(JsonlSink(cfg.path))
    if cfg.kind == "memory":
        return Recorder(MemorySink())
    return None


def build(cfg: ScenarioModel | Mapping, *, feed: MapFeed | None = None, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks & recorder
    recorder = _make_recorder(model.recorder)
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Map records (read once, before any query)
    if feed is None:
        feed = load_feed(model.map)
    hooks.build_start(source=feed.source, nodes=len(feed.nodes), ways=len(feed.ways))

    # 3) Road network & places
    builder = NetworkBuilder(road_tag=model.routing.road_tag, source=feed.source)
    network = builder.build(feed.nodes, feed.ways)
    places = extract_places(feed.nodes, feed.ways, network, name_tag=model.routing.name_tag)
    hooks.build_end(
        nodes=network.node_count,
        edges=network.edge_count,
        road_ways=builder.road_ways,
        skipped_pairs=builder.skipped_pairs,
        places=len(places),
    )

    # 4) Query service (read-only view of the network)
    queries = RouteQueryService(
        network,
        places,
        hooks=hooks,
        reconstruct_path=model.routing.reconstruct_path,
        probe_on_failure=model.routing.probe_on_failure,
    )
    return App(network, places, queries, hooks, recorder)
