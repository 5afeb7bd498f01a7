from collections.abc import Iterable
from dataclasses import dataclass

Tag = tuple[str, str]


def first_tag(tags: Iterable[Tag], key: str) -> str | None:
    """Value of the first tag with ``key``, or None when absent."""
    for k, v in tags:
        if k == key:
            return v
    return None


@dataclass(frozen=True)
class NodeRecord:
    id: int
    lat: float
    lon: float
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class WayRecord:
    refs: tuple[int, ...]
    tags: tuple[Tag, ...] = ()
    id: int | None = None


@dataclass(frozen=True)
class MapFeed:
    """
    Ordered node and way records as handed over by a map reader.

    Read-only: feeds loaded from disk are cached and shared between callers.
    """

    nodes: tuple[NodeRecord, ...] = ()
    ways: tuple[WayRecord, ...] = ()
    source: str = "<memory>"

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "ways", tuple(self.ways))
