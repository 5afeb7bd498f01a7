from typing import Protocol, runtime_checkable

from osm_router.domain.entities.records import MapFeed


# ------------- Map input --------------------
@runtime_checkable
class MapReader(Protocol):
    """
    Responsibilities:
      • Turn a map extract into ordered node and way records.
      • Raise MalformedRecordError when a required numeric field is missing/unparseable.
    """

    def read(self, path: str) -> MapFeed: ...


# ------------- Lifecycle hooks --------------------
@runtime_checkable
class RouteHooks(Protocol):
    """
    Observation points for the build phase and for each query.
    Implementations must not mutate the network or the query state.
    """

    def build_start(self, *, source: str, nodes: int, ways: int): ...
    def build_end(
        self, *, nodes: int, edges: int, road_ways: int, skipped_pairs: int, places: int
    ): ...
    def query_start(self, *, source: str, target: str): ...
    def query_end(self, report, *, ms: float): ...
    def no_path(self, report, *, ms: float): ...
    def error(self, *, reason: str, **kw): ...
