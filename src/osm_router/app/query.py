# osm_router/app/query.py
import time
from collections.abc import Sequence
from dataclasses import dataclass

from osm_router.app.hooks import NoopHooks
from osm_router.app.protocols import RouteHooks
from osm_router.domain.entities.geography import Coordinate, NamedPlace, PathResult
from osm_router.domain.entities.network import RoadNetwork
from osm_router.domain.errors import NoPathError, RoutingError
from osm_router.domain.routing.routing_diagnostics import ConnectivityReport, diagnose
from osm_router.domain.routing.routing_distance import haversine_km, haversine_m
from osm_router.domain.routing.routing_locator import locate_nearest
from osm_router.domain.routing.routing_paths import shortest_path
from osm_router.domain.routing.routing_places import find_place


@dataclass(frozen=True)
class RouteReport:
    source: NamedPlace
    destination: NamedPlace
    source_node: int
    target_node: int
    source_node_coord: Coordinate
    target_node_coord: Coordinate
    direct_distance_m: float
    result: PathResult | None = None
    diagnostics: ConnectivityReport | None = None

    @property
    def found(self) -> bool:
        return self.result is not None

    @property
    def road_distance_m(self) -> float | None:
        return None if self.result is None else self.result.total_weight

    @property
    def detour_pct(self) -> float | None:
        """How much longer the road route is than the direct distance, in percent."""
        if self.result is None or self.direct_distance_m == 0:
            return None
        return (self.result.total_weight / self.direct_distance_m - 1) * 100


class RouteQueryService:
    """
    Place-to-place queries over a built, read-only network.

    Each query resolves both places to their nearest connected node, runs the
    shortest-path search and, when no path exists, attaches connectivity
    diagnostics instead of failing. Query state is local to each call.
    """

    def __init__(
        self,
        network: RoadNetwork,
        places: Sequence[NamedPlace],
        *,
        hooks: RouteHooks | None = None,
        reconstruct_path: bool = True,
        probe_on_failure: bool = True,
    ):
        self.network, self.places = network, tuple(places)
        self.hooks = hooks or NoopHooks()
        self.reconstruct_path, self.probe_on_failure = reconstruct_path, probe_on_failure

    def place(self, query: str | int) -> NamedPlace:
        return find_place(self.places, query)

    def route_between(self, source: NamedPlace | str | int, destination: NamedPlace | str | int) -> RouteReport:
        src = source if isinstance(source, NamedPlace) else self.place(source)
        dst = destination if isinstance(destination, NamedPlace) else self.place(destination)
        self.hooks.query_start(source=src.name, target=dst.name)
        t0 = time.perf_counter()
        try:
            u = locate_nearest(self.network, src.coordinate)
            v = locate_nearest(self.network, dst.coordinate)
            base = dict(
                source=src,
                destination=dst,
                source_node=u,
                target_node=v,
                source_node_coord=self.network.coordinate(u),
                target_node_coord=self.network.coordinate(v),
                direct_distance_m=haversine_m(src.coordinate, dst.coordinate),
            )
            try:
                result = shortest_path(self.network, u, v, reconstruct=self.reconstruct_path)
            except NoPathError:
                diag = diagnose(self.network, u, v, probe=self.probe_on_failure)
                report = RouteReport(**base, diagnostics=diag)
                self.hooks.no_path(report, ms=(time.perf_counter() - t0) * 1000)
                return report
        except RoutingError as exc:
            self.hooks.error(reason=type(exc).__name__, detail=str(exc), source=src.name, destination=dst.name)
            raise
        report = RouteReport(**base, result=result)
        self.hooks.query_end(report, ms=(time.perf_counter() - t0) * 1000)
        return report

    def advisory_distance_km(self, a: NamedPlace | str | int, b: NamedPlace | str | int) -> float:
        """Great-circle distance between two places, in kilometers."""
        pa = a if isinstance(a, NamedPlace) else self.place(a)
        pb = b if isinstance(b, NamedPlace) else self.place(b)
        return haversine_km(pa.coordinate, pb.coordinate)
