# io/query_logging.py
import json
import logging
import sys

from osm_router.app.hooks import NoopHooks
from osm_router.io.query_events import RouteComputedEvent, RouteFailedEvent
from osm_router.io.recorder import Recorder


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="osm_router", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class QueryLogging(NoopHooks):
    """
    Structured logs for the build phase and every route query.
    Forwards one analytics event per query to the recorder when one is set.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.recorder = run_id, debug, recorder
        self.log = logger or default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    @staticmethod
    def _ends(report) -> dict:
        return {
            "source": report.source.name,
            "destination": report.destination.name,
            "source_node": report.source_node,
            "target_node": report.target_node,
        }

    # --------------------------------------------------------

    def build_start(self, *, source: str, nodes: int, ways: int):
        self._emit("INFO", "build_start", source=source, nodes=nodes, ways=ways)

    def build_end(self, *, nodes: int, edges: int, road_ways: int, skipped_pairs: int, places: int):
        self._emit(
            "INFO",
            "build_end",
            nodes=nodes,
            edges=edges,
            road_ways=road_ways,
            skipped_pairs=skipped_pairs,
            places=places,
        )

    def query_start(self, *, source: str, target: str):
        if self.debug:
            self._emit("DEBUG", "query_start", source=source, destination=target)

    def query_end(self, report, *, ms: float):
        self._seq += 1
        result = report.result
        self._emit(
            "INFO",
            "route_computed",
            **self._ends(report),
            road_m=round(result.total_weight, 3),
            direct_m=round(report.direct_distance_m, 3),
            hops=result.hops,
            ms=round(ms, 3),
        )
        if self.recorder:
            self.recorder.emit(
                RouteComputedEvent(
                    run_id=self.run_id,
                    seq=self._seq,
                    name="RouteComputed",
                    **self._ends(report),
                    road_m=result.total_weight,
                    direct_m=report.direct_distance_m,
                    hops=result.hops,
                    ms=ms,
                )
            )

    def no_path(self, report, *, ms: float):
        self._seq += 1
        diag = report.diagnostics
        self._emit(
            "WARNING",
            "no_path",
            **self._ends(report),
            source_degree=diag.source_degree,
            target_degree=diag.target_degree,
            component_size=diag.component_size,
            target_reachable=diag.target_reachable,
            ms=round(ms, 3),
        )
        if self.recorder:
            self.recorder.emit(
                RouteFailedEvent(
                    run_id=self.run_id,
                    seq=self._seq,
                    name="RouteFailed",
                    **self._ends(report),
                    source_degree=diag.source_degree,
                    target_degree=diag.target_degree,
                    target_reachable=diag.target_reachable,
                    ms=ms,
                )
            )

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "query_error", reason=reason, **kw)
