from collections.abc import Callable, Iterator

import numpy as np

from osm_router.domain.entities.geography import Coordinate
from osm_router.domain.errors import UnknownNodeError

Metric = Callable[[Coordinate, Coordinate], float]


class RoadNetwork:
    """
    Undirected weighted road graph.

    Responsibilities:
      • Own the node set (id -> Coordinate), adjacency (id -> ordered neighbours)
        and the pair-keyed weight lookup.
      • Keep weights symmetric: w(a, b) == w(b, a).
      • Become read-only once frozen by the builder.
    Units: meters for weights.
    """

    def __init__(self, metric: Metric):
        self._metric = metric
        self._nodes: dict[int, Coordinate] = {}
        self._adj: dict[int, list[int]] = {}
        self._w: dict[tuple[int, int], float] = {}
        self._frozen = False
        # connected-node arrays for vectorised nearest lookups (set on freeze)
        self._conn_ids: np.ndarray | None = None
        self._conn_lat: np.ndarray | None = None
        self._conn_lon: np.ndarray | None = None

    # ---------------- construction -----------------------

    def add_node(self, node_id: int, coord: Coordinate) -> None:
        self._check_mutable()
        self._nodes[node_id] = coord  # last write wins

    def add_edge(self, u: int, v: int) -> bool:
        """Connect u and v in both directions; False if skipped."""
        self._check_mutable()
        if u not in self._nodes or v not in self._nodes:
            return False
        if u == v or (u, v) in self._w:
            return False
        length = self._metric(self._nodes[u], self._nodes[v])
        self._adj.setdefault(u, []).append(v)
        self._adj.setdefault(v, []).append(u)
        self._w[(u, v)] = length
        self._w[(v, u)] = length
        return True

    def freeze(self) -> "RoadNetwork":
        if self._frozen:
            return self
        ids = list(self._adj)
        self._conn_ids = np.asarray(ids, dtype=np.int64)
        self._conn_lat = np.asarray([self._nodes[n].latitude for n in ids], dtype=float)
        self._conn_lon = np.asarray([self._nodes[n].longitude for n in ids], dtype=float)
        self._frozen = True
        return self

    def _check_mutable(self):
        if self._frozen:
            raise RuntimeError("road network is read-only after build")

    # ---------------- queries -----------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._w) // 2

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Iterator[int]:
        return iter(self._nodes)

    def coordinate(self, node_id: int) -> Coordinate:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def neighbors(self, node_id: int) -> tuple[int, ...]:
        return tuple(self._adj.get(node_id, ()))

    def degree(self, node_id: int) -> int:
        return len(self._adj.get(node_id, ()))

    def is_connected_node(self, node_id: int) -> bool:
        return node_id in self._adj

    def connected_nodes(self) -> Iterator[int]:
        """Nodes with at least one incident edge, in first-connection order."""
        return iter(self._adj)

    def has_edges(self) -> bool:
        return bool(self._adj)

    def weight(self, u: int, v: int) -> float:
        return self._w.get((u, v), float("inf"))

    def edges(self) -> Iterator[tuple[int, int, float]]:
        """Each undirected edge once, as (u, v, weight)."""
        for (u, v), w in self._w.items():
            if u < v:
                yield u, v, w

    def connected_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        if not self._frozen:
            raise RuntimeError("freeze() the network before vectorised lookups")
        return self._conn_ids, self._conn_lat, self._conn_lon
