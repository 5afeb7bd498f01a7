# osm_router/io/recorder.py
import json
import sys
from collections import Counter
from dataclasses import asdict
from typing import Protocol

from osm_router.io.query_events import QueryEvent, RouteComputedEvent, RouteFailedEvent


class Sink(Protocol):
    def write(self, ev: QueryEvent) -> None: ...


class JsonlSink:
    """
    One JSON object per query event, flushed per line.

    Writes to ``path`` (appending) when given, otherwise to the current stdout.
    """

    def __init__(self, path: str | None = None, fp=None):
        self.path, self.fp = path, fp

    def write(self, ev: QueryEvent) -> None:
        line = json.dumps(asdict(ev), ensure_ascii=False) + "\n"
        if self.path is not None:
            with open(self.path, "a", encoding="utf-8") as fp:
                fp.write(line)
            return
        fp = self.fp or sys.stdout
        fp.write(line)
        fp.flush()


class MemorySink:
    def __init__(self):
        self.events: list[QueryEvent] = []

    def write(self, ev: QueryEvent) -> None:
        self.events.append(ev)

    def computed(self) -> list[RouteComputedEvent]:
        return [e for e in self.events if isinstance(e, RouteComputedEvent)]

    def failed(self) -> list[RouteFailedEvent]:
        return [e for e in self.events if isinstance(e, RouteFailedEvent)]


class Recorder:
    """Fans query events out to every sink and tallies them by event name."""

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.counts: Counter[str] = Counter()

    def emit(self, ev: QueryEvent) -> None:
        self.counts[ev.name] += 1
        for s in self.sinks:
            s.write(ev)
