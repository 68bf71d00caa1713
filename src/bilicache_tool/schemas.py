"""Pydantic schemas for runtime validation of run inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

DEFAULT_STAGE_NAMES: tuple[str, ...] = ("non_empty",)


class RunConfig(BaseModel):
    """Validated roots for a single discovery-and-processing run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_root: Path
    output_root: Path

    @field_validator("input_root", "output_root")
    @classmethod
    def _validate_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError("paths must be absolute.")
        return value


class StageResolutionConfig(BaseModel):
    """Validated input for stage registry resolution."""

    model_config = ConfigDict(extra="forbid")

    stage_names: list[str] = Field(min_length=1)
    stage_modules: list[str] = Field(default_factory=list)

    @field_validator("stage_names")
    @classmethod
    def _validate_stage_names(cls, value: list[str]) -> list[str]:
        stripped = [name.strip() for name in value]
        if any(not name for name in stripped):
            raise ValueError("stage names cannot contain empty entries.")
        return stripped


# entry.json carries no fixed schema at this layer; only an object is required.
EntryDocument = TypeAdapter(dict[str, Any])
