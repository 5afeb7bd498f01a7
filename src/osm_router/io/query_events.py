# osm_router/io/query_events.py

from dataclasses import dataclass


# Base type for analytics events, one per query
@dataclass
class QueryEvent:
    run_id: str
    seq: int  # query sequence within the run
    name: str  # stable event name


@dataclass
class RouteComputedEvent(QueryEvent):
    source: str
    destination: str
    source_node: int
    target_node: int
    road_m: float
    direct_m: float
    hops: int | None = None
    ms: float | None = None


@dataclass
class RouteFailedEvent(QueryEvent):
    source: str
    destination: str
    source_node: int
    target_node: int
    source_degree: int
    target_degree: int
    target_reachable: bool | None = None
    ms: float | None = None
