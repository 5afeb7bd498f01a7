# io/osm_feed.py
import json
import math
import xml.etree.ElementTree as ET
from pathlib import Path

from osm_router.domain.entities.records import MapFeed, NodeRecord, Tag, WayRecord
from osm_router.domain.errors import MalformedRecordError


def _num(source: str, kind: str, raw, cast):
    if raw is None:
        raise MalformedRecordError(source, f"{kind} missing")
    if isinstance(raw, bool):
        raise MalformedRecordError(source, f"{kind} not numeric: {raw!r}")
    try:
        value = cast(raw)
    except (TypeError, ValueError, OverflowError):
        raise MalformedRecordError(source, f"{kind} not numeric: {raw!r}") from None
    if cast is float and not math.isfinite(value):
        raise MalformedRecordError(source, f"{kind} not finite: {raw!r}")
    return value


def _ident(source: str, kind: str, raw) -> int:
    # ids and refs must be whole numbers; 1.9 must not collapse onto 1
    if isinstance(raw, float) and not raw.is_integer():
        raise MalformedRecordError(source, f"{kind} not an integer: {raw!r}")
    return _num(source, kind, raw, int)


class OsmXmlReader:
    """
    Streaming reader for OSM XML extracts.

    Emits nodes and ways in document order; relations are ignored. Tags keep
    their document order as (k, v) pairs. Finished elements are dropped from
    the tree as soon as they are read.
    """

    def read(self, path: str) -> MapFeed:
        src = str(path)
        nodes: list[NodeRecord] = []
        ways: list[WayRecord] = []
        root = None
        try:
            for event, elem in ET.iterparse(src, events=("start", "end")):
                if event == "start":
                    if root is None:
                        root = elem
                    continue
                if elem.tag == "node":
                    nodes.append(self._node(src, elem))
                elif elem.tag == "way":
                    ways.append(self._way(src, elem))
                elif elem.tag != "relation":
                    continue
                root.clear()
        except ET.ParseError as exc:
            raise MalformedRecordError(src, f"xml: {exc}") from exc
        return MapFeed(nodes=nodes, ways=ways, source=src)

    @staticmethod
    def _tags(elem) -> tuple[Tag, ...]:
        return tuple((t.attrib.get("k", ""), t.attrib.get("v", "")) for t in elem.findall("tag"))

    def _node(self, src: str, elem) -> NodeRecord:
        a = elem.attrib
        node_id = _ident(src, "node id", a.get("id"))
        return NodeRecord(
            id=node_id,
            lat=_num(src, f"node {node_id} lat", a.get("lat"), float),
            lon=_num(src, f"node {node_id} lon", a.get("lon"), float),
            tags=self._tags(elem),
        )

    def _way(self, src: str, elem) -> WayRecord:
        way_id = elem.attrib.get("id")
        way_id = None if way_id is None else _ident(src, "way id", way_id)
        refs = tuple(_ident(src, f"way {way_id} ref", nd.attrib.get("ref")) for nd in elem.findall("nd"))
        return WayRecord(refs=refs, tags=self._tags(elem), id=way_id)


class JsonlRecordReader:
    """
    One JSON object per line:
      {"type": "node", "id": 1, "lat": 0.0, "lon": 0.0, "tags": [["name", "Cafe"]]}
      {"type": "way", "id": 7, "refs": [1, 2], "tags": [["highway", "residential"]]}
    Blank lines are skipped.
    """

    def read(self, path: str) -> MapFeed:
        src = str(path)
        nodes: list[NodeRecord] = []
        ways: list[WayRecord] = []
        with Path(src).open(encoding="utf-8") as fp:
            for lineno, line in enumerate(fp, start=1):
                line = line.strip()
                if not line:
                    continue
                where = f"{src}:{lineno}"
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise MalformedRecordError(where, f"json: {exc.msg}") from exc
                if not isinstance(obj, dict):
                    raise MalformedRecordError(where, f"expected an object, got {type(obj).__name__}")
                kind = obj.get("type")
                tags = self._tags(where, obj.get("tags", []))
                if kind == "node":
                    nodes.append(
                        NodeRecord(
                            id=_ident(where, "node id", obj.get("id")),
                            lat=_num(where, "node lat", obj.get("lat"), float),
                            lon=_num(where, "node lon", obj.get("lon"), float),
                            tags=tags,
                        )
                    )
                elif kind == "way":
                    raw_refs = obj.get("refs", [])
                    if not isinstance(raw_refs, list):
                        raise MalformedRecordError(where, f"way refs must be a list: {raw_refs!r}")
                    way_id = obj.get("id")
                    ways.append(
                        WayRecord(
                            refs=tuple(_ident(where, "way ref", r) for r in raw_refs),
                            tags=tags,
                            id=None if way_id is None else _ident(where, "way id", way_id),
                        )
                    )
                else:
                    raise MalformedRecordError(where, f"unknown record type {kind!r}")
        return MapFeed(nodes=nodes, ways=ways, source=src)

    @staticmethod
    def _tags(where: str, raw) -> tuple[Tag, ...]:
        if not isinstance(raw, list):
            raise MalformedRecordError(where, f"tags must be a list of pairs: {raw!r}")
        out = []
        for pair in raw:
            if not isinstance(pair, list) or len(pair) != 2:
                raise MalformedRecordError(where, f"tag is not a [key, value] pair: {pair!r}")
            out.append((str(pair[0]), str(pair[1])))
        return tuple(out)
