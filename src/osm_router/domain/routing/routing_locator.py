import numpy as np

from osm_router.domain.entities.geography import Coordinate
from osm_router.domain.entities.network import RoadNetwork
from osm_router.domain.errors import EmptyNetworkError
from osm_router.domain.routing.routing_distance import haversine_m, haversine_m_many


def locate_nearest(network: RoadNetwork, coord: Coordinate) -> int:
    """
    Closest node with at least one incident edge.

    Isolated nodes are never eligible, and neither are nodes whose distance
    cannot be computed (non-finite coordinates). Ties go to the node that
    gained its first edge earliest during the build.
    """
    if not network.has_edges():
        raise EmptyNetworkError()
    if not network.frozen:
        return _scan(network, coord)
    ids, lats, lons = network.connected_arrays()
    d = haversine_m_many(coord, lats, lons)
    d[np.isnan(d)] = np.inf
    i = int(np.argmin(d))
    if not np.isfinite(d[i]):
        raise EmptyNetworkError("no connected node has a usable coordinate")
    return int(ids[i])


def _scan(network: RoadNetwork, coord: Coordinate) -> int:
    best, best_d = None, float("inf")
    for n in network.connected_nodes():
        d = haversine_m(coord, network.coordinate(n))
        if d < best_d:
            best, best_d = n, d
    if best is None:
        raise EmptyNetworkError("no connected node has a usable coordinate")
    return best
