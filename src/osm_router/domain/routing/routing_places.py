from collections.abc import Iterable, Sequence

from osm_router.domain.entities.geography import NamedPlace
from osm_router.domain.entities.network import RoadNetwork
from osm_router.domain.entities.records import NodeRecord, WayRecord, first_tag
from osm_router.domain.errors import UnknownPlaceError


def _way_anchor(way: WayRecord, network: RoadNetwork):
    # first ref that resolves to a known node
    for ref in way.refs:
        if ref in network:
            return network.coordinate(ref)
    return None


def extract_places(
    nodes: Iterable[NodeRecord],
    ways: Iterable[WayRecord],
    network: RoadNetwork,
    *,
    name_tag: str = "name",
) -> list[NamedPlace]:
    """
    Collect named places from tagged nodes and ways, independent of road membership.

    Node places sit on the node itself; way places sit on the first resolvable ref.
    Duplicates by (name, lat, lon) are dropped, first occurrence wins, and the
    result keeps first-seen order. An empty list is a valid answer.
    """
    candidates: list[NamedPlace] = []
    for rec in nodes:
        name = first_tag(rec.tags, name_tag)
        if name is not None and rec.id in network:
            candidates.append(NamedPlace(name, network.coordinate(rec.id)))
    for way in ways:
        name = first_tag(way.tags, name_tag)
        if name is None:
            continue
        anchor = _way_anchor(way, network)
        if anchor is not None:
            candidates.append(NamedPlace(name, anchor))

    seen: set[tuple[str, float, float]] = set()
    places: list[NamedPlace] = []
    for p in candidates:
        if p.key in seen:
            continue
        seen.add(p.key)
        places.append(p)
    return places


def find_place(places: Sequence[NamedPlace], query: str | int) -> NamedPlace:
    """
    Look a place up by list index or by exact name (first match).

    A string is matched against names first; an all-digit string that names no
    place is then taken as an index, so places called "1" stay reachable.
    """
    if isinstance(query, str):
        for p in places:
            if p.name == query:
                return p
        if not query.isdecimal():
            raise UnknownPlaceError(query)
        index = int(query)
    else:
        index = query
    if 0 <= index < len(places):
        return places[index]
    raise UnknownPlaceError(query)
