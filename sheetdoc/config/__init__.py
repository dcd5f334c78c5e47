"""Configuration helpers for SheetDoc conversion jobs.

A job file names a workbook, the sheets to convert and the shared reading
options; relative paths are resolved against the job file's directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sheetdoc.core.errors import ConfigError
from sheetdoc.core.settings import resolve_relative

TimeFormat = Literal["iso", "epoch", "keep"]
TIME_FORMATS = ("iso", "epoch", "keep")
DEFAULT_TIME_FORMAT: TimeFormat = "iso"


class SheetJob(BaseModel):
    """One sheet to convert, with optional overrides of the job defaults."""

    model_config = ConfigDict(extra="forbid")

    name: str
    output: str | None = None
    header_row: int | None = Field(default=None, ge=0)
    skip: int | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("sheet name must not be blank")
        return value

    def output_name(self) -> str:
        return self.output or f"{self.name}.json"


class ConversionJob(BaseModel):
    """Complete job file model."""

    model_config = ConfigDict(extra="forbid")

    workbook: Path
    sheets: List[SheetJob] = Field(min_length=1)
    header_row: int = Field(default=1, ge=0)
    skip: int = Field(default=0, ge=0)
    output_dir: Path = Path("out")
    indent: int | None = 2
    file_root: Path | None = None
    time_format: TimeFormat = DEFAULT_TIME_FORMAT

    @field_validator("sheets", mode="before")
    @classmethod
    def _accept_plain_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    def resolve_paths(self, base: Path) -> "ConversionJob":
        """Return a copy whose paths are absolute relative to ``base``."""

        updates: Dict[str, Any] = {
            "workbook": resolve_relative(self.workbook, base),
            "output_dir": resolve_relative(self.output_dir, base),
        }
        if self.file_root is not None:
            updates["file_root"] = resolve_relative(self.file_root, base)
        return self.model_copy(update=updates)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Job file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Job file is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Job file must contain a mapping")
    return data


def load_job(path: str | Path) -> ConversionJob:
    """Load and validate a conversion job from YAML.

    Raises:
        ConfigError: When the file is missing, malformed or fails validation.
    """

    job_path = Path(path).expanduser().resolve()
    raw = _load_yaml(job_path)
    try:
        job = ConversionJob.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid job file {job_path}: {exc}") from exc
    return job.resolve_paths(job_path.parent)


__all__ = [
    "ConversionJob",
    "DEFAULT_TIME_FORMAT",
    "SheetJob",
    "TIME_FORMATS",
    "TimeFormat",
    "load_job",
]
