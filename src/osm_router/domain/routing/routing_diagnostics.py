from collections import deque
from dataclasses import dataclass

from osm_router.domain.entities.network import RoadNetwork

NO_PATH_REASONS = (
    "Locations are on disconnected road segments",
    "Missing connections in the map extract",
    "The area might be marked as private or inaccessible",
)


def reachable_from(network: RoadNetwork, start: int) -> set[int]:
    """Breadth-first component of ``start``; read-only on the network."""
    seen = {start}
    q = deque([start])
    while q:
        u = q.popleft()
        for v in network.neighbors(u):
            if v not in seen:
                seen.add(v)
                q.append(v)
    return seen


@dataclass(frozen=True)
class ConnectivityReport:
    source: int
    target: int
    source_degree: int
    target_degree: int
    component_size: int | None = None  # None => probe not run
    target_reachable: bool | None = None
    reasons: tuple[str, ...] = NO_PATH_REASONS

    @property
    def source_isolated(self) -> bool:
        return self.source_degree == 0

    @property
    def target_isolated(self) -> bool:
        return self.target_degree == 0

    def lines(self) -> list[str]:
        out = [f"- {r}" for r in self.reasons]
        if self.source_isolated:
            out.append("- Source node has no connections")
        if self.target_isolated:
            out.append("- Destination node has no connections")
        if self.component_size is not None:
            where = "inside" if self.target_reachable else "outside"
            out.append(
                f"- Source component holds {self.component_size} node(s); "
                f"destination is {where} it"
            )
        return out


def diagnose(network: RoadNetwork, source: int, target: int, *, probe: bool = True) -> ConnectivityReport:
    size = reachable = None
    if probe:
        comp = reachable_from(network, source)
        size, reachable = len(comp), target in comp
    return ConnectivityReport(
        source=source,
        target=target,
        source_degree=network.degree(source),
        target_degree=network.degree(target),
        component_size=size,
        target_reachable=reachable,
    )
