# osm_router/runtime/resources.py
import os
from functools import lru_cache

from osm_router.config.models import MapModel
from osm_router.domain.entities.records import MapFeed
from osm_router.runtime.registries import make_reader


@lru_cache(maxsize=8)
def load_feed_from_path(file: str, fmt: str, mtime_ns: int = 0) -> MapFeed:
    # mtime_ns only keys the cache, so an edited file is read again
    return make_reader(MapModel(file=file, fmt=fmt)).read(file)


def load_feed(cfg: MapModel) -> MapFeed:
    """Read the configured extract; the returned feed is shared and immutable."""
    if not os.path.exists(cfg.file):
        if cfg.must_exist:
            raise FileNotFoundError(cfg.file)
        return MapFeed(source=cfg.file)
    return load_feed_from_path(cfg.file, cfg.fmt, os.stat(cfg.file).st_mtime_ns)
