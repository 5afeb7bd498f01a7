import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class MapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["osm_xml", "jsonl"] = "osm_xml"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    reconstruct_path: bool = True
    probe_on_failure: bool = True  # BFS reachability probe on NoPathError
    road_tag: str = "highway"
    name_tag: str = "name"

    @field_validator("road_tag", "name_tag")
    @classmethod
    def _non_empty(cls, v: str, info: ValidationInfo) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v


# ----------------- RECORDERS ---------------------


class RecorderNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["none"] = "none"


class RecorderJsonlModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["jsonl"] = "jsonl"
    path: str | None = None  # None writes to stdout


class RecorderMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


RecorderUnion = Annotated[
    RecorderNoneModel | RecorderJsonlModel | RecorderMemoryModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    map: MapModel
    log: LogModel = LogModel()
    routing: RoutingModel = RoutingModel()
    recorder: RecorderUnion = Field(default_factory=RecorderNoneModel)
