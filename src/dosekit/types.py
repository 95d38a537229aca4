"""Core dosekit type definitions."""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dosekit.constants import (
    BYTES_PER_MB,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_MAX_SIZE_MB,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class PipelineConfig(BaseModel):
    """Settings for one upload pipeline, read from the [pipeline] config table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    max_workers: int = Field(
        default=1, ge=1, description="Worker threads for per-sample transformation"
    )
    excluded_sources: tuple[str, ...] = Field(
        default=(), description="Source names dropped by the filter stage"
    )
    drop_duplicate_ids: bool = Field(
        default=False, description="Keep only the first sample per uuid"
    )
    strip_consumed_metadata: bool = Field(
        default=False,
        description="Leave classification/derivation keys out of the payload",
    )


class LoggingSettings(BaseModel):
    """File logging settings, read from the [logging] config table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = Field(default=True, description="Write a rotating log file")
    level: LogLevel = Field(default="DEBUG", description="File handler level")
    max_size_mb: float = Field(
        default=DEFAULT_LOG_MAX_SIZE_MB, gt=0, description="Size before rotation"
    )
    backup_count: int = Field(
        default=DEFAULT_LOG_BACKUP_COUNT, ge=0, description="Rotated files kept"
    )
    directory: Path | None = Field(
        default=None, description="Log directory (default: ~/.dosekit/logs)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def max_bytes(self) -> int:
        return int(self.max_size_mb * BYTES_PER_MB)

    @property
    def log_dir(self) -> Path:
        return self.directory.expanduser() if self.directory else DEFAULT_LOG_DIR
