# domain/errors.py


class RoutingError(Exception):
    """Base for every error raised by the routing core."""


class MalformedRecordError(RoutingError, ValueError):
    def __init__(self, source: str, detail: str):
        self.source, self.detail = source, detail
        super().__init__(f"malformed record in {source}: {detail}")


class EmptyNetworkError(RoutingError):
    def __init__(self, msg: str = "no road network available: no node has an incident edge"):
        super().__init__(msg)


class UnknownNodeError(RoutingError, KeyError):
    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"unknown node id {self.node_id}"


class NoPathError(RoutingError):
    def __init__(self, source: int, target: int):
        self.source, self.target = source, target
        super().__init__(f"no path exists between nodes {source} and {target}")


class UnknownPlaceError(RoutingError, LookupError):
    def __init__(self, query: str | int):
        self.query = query
        super().__init__(f"unknown place {query!r}")
