from dataclasses import dataclass


# Core geographic types used by routing
@dataclass(frozen=True)
class Coordinate:
    latitude: float  # decimal degrees
    longitude: float

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


@dataclass(frozen=True)
class NamedPlace:
    name: str
    coordinate: Coordinate

    @property
    def key(self) -> tuple[str, float, float]:
        return (self.name, self.coordinate.latitude, self.coordinate.longitude)

    def __str__(self) -> str:
        return f"{self.name} {self.coordinate}"


@dataclass(frozen=True)
class PathResult:
    total_weight: float  # meters
    path: tuple[int, ...] | None = None  # None => reconstruction not requested

    @property
    def hops(self) -> int | None:
        return None if self.path is None else max(len(self.path) - 1, 0)
