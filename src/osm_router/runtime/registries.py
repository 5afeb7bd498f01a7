# runtime/registries.py
from collections.abc import Callable

from osm_router.app.protocols import MapReader
from osm_router.config.models import MapModel
from osm_router.io.osm_feed import JsonlRecordReader, OsmXmlReader

ReaderFactory = Callable[[MapModel], MapReader]

_reader_registry: dict[str, ReaderFactory] = {}


# ------------------- Map readers ---------------------------


def register_reader(fmt: str):
    def deco(fn: ReaderFactory):
        _reader_registry[fmt] = fn
        return fn

    return deco


def make_reader(cfg: MapModel) -> MapReader:
    try:
        return _reader_registry[cfg.fmt](cfg)
    except KeyError:
        raise ValueError(f"Unknown map fmt {cfg.fmt!r}") from None


def known_formats() -> list[str]:
    return sorted(_reader_registry)


@register_reader("osm_xml")
def _make_osm_xml(cfg: MapModel):
    return OsmXmlReader()


@register_reader("jsonl")
def _make_jsonl(cfg: MapModel):
    return JsonlRecordReader()
