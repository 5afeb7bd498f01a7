import heapq
import math

from osm_router.domain.entities.geography import PathResult
from osm_router.domain.entities.network import RoadNetwork
from osm_router.domain.errors import NoPathError, UnknownNodeError


def shortest_path(
    network: RoadNetwork, source: int, target: int, *, reconstruct: bool = True
) -> PathResult:
    """
    Minimum-weight route between two nodes (Dijkstra, binary heap frontier).

    Improved keys are pushed again instead of decreased; a popped entry is stale
    when its node is already settled or its key exceeds the recorded best, and is
    skipped. All state is local to the call.

    Raises UnknownNodeError if either endpoint is not in the network and
    NoPathError if the target is not reachable from the source.
    """
    for n in (source, target):
        if n not in network:
            raise UnknownNodeError(n)

    dist: dict[int, float] = {source: 0.0}
    prev: dict[int, int] = {}
    settled: set[int] = set()
    frontier: list[tuple[float, int]] = [(0.0, source)]

    while frontier:
        d, u = heapq.heappop(frontier)
        if u in settled or d > dist.get(u, math.inf):
            continue
        if u == target:
            path = _walk_back(prev, source, target) if reconstruct else None
            return PathResult(total_weight=d, path=path)
        if math.isinf(d):
            break
        settled.add(u)
        for v in network.neighbors(u):
            if v in settled:
                continue
            nd = d + network.weight(u, v)
            if nd < dist.get(v, math.inf):
                dist[v] = nd
                prev[v] = u
                heapq.heappush(frontier, (nd, v))

    raise NoPathError(source, target)


def _walk_back(prev: dict[int, int], source: int, target: int) -> tuple[int, ...]:
    nodes = [target]
    while nodes[-1] != source:
        nodes.append(prev[nodes[-1]])
    nodes.reverse()
    return tuple(nodes)


# front-end name
route = shortest_path
