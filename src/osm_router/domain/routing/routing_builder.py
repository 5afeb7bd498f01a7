import math
from collections.abc import Iterable

from osm_router.domain.entities.geography import Coordinate
from osm_router.domain.entities.network import Metric, RoadNetwork
from osm_router.domain.entities.records import NodeRecord, WayRecord, first_tag
from osm_router.domain.errors import MalformedRecordError
from osm_router.domain.routing.routing_distance import haversine_m


def is_road(way: WayRecord, road_tag: str = "highway") -> bool:
    return bool(first_tag(way.tags, road_tag))


class NetworkBuilder:
    """
    Build a RoadNetwork from node and way records.

    Every node lands in the node set; only ways carrying a non-empty ``road_tag``
    contribute edges, one per consecutive ref pair whose endpoints are both known.
    Counters from the last build are kept for reporting.
    """

    def __init__(self, *, road_tag: str = "highway", metric: Metric = haversine_m, source: str = "<memory>"):
        self.road_tag, self.metric, self.source = road_tag, metric, source
        self.road_ways = 0
        self.skipped_pairs = 0

    def build(self, nodes: Iterable[NodeRecord], ways: Iterable[WayRecord]) -> RoadNetwork:
        self.road_ways = self.skipped_pairs = 0
        net = RoadNetwork(self.metric)

        for rec in nodes:
            node_id, coord = self._node(rec)
            net.add_node(node_id, coord)

        for way in ways:
            if not is_road(way, self.road_tag):
                continue
            self.road_ways += 1
            refs = way.refs
            for i in range(1, len(refs)):
                u, v = refs[i - 1], refs[i]
                if u not in net or v not in net:
                    # ref outside the extract boundary
                    self.skipped_pairs += 1
                    continue
                net.add_edge(u, v)

        return net.freeze()

    def _node(self, rec: NodeRecord) -> tuple[int, Coordinate]:
        try:
            node_id, lat, lon = int(rec.id), float(rec.lat), float(rec.lon)
        except (TypeError, ValueError, OverflowError) as exc:
            raise MalformedRecordError(self.source, f"node {rec.id!r}: {exc}") from exc
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise MalformedRecordError(self.source, f"node {rec.id!r}: non-finite coordinate ({lat}, {lon})")
        return node_id, Coordinate(lat, lon)


def build_network(
    nodes: Iterable[NodeRecord],
    ways: Iterable[WayRecord],
    *,
    road_tag: str = "highway",
    metric: Metric = haversine_m,
) -> RoadNetwork:
    return NetworkBuilder(road_tag=road_tag, metric=metric).build(nodes, ways)
