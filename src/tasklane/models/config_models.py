"""Configuration models.

This module defines the settings that choose the storage backend and tune the
query engine and lifecycle service.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["memory", "json"] = Field(
        default="json", description="Repository backend"
    )
    path: str | None = Field(
        default=None, description="JSON store path (defaults to the data dir)"
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        """Treat blank paths as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


class PaginationConfig(BaseModel):
    """Pagination configuration."""

    default_limit: int = Field(default=50, ge=1)


class ChecklistConfig(BaseModel):
    """Checklist identifier policy."""

    id_policy: Literal["positional", "random"] = Field(default="positional")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["table", "pretty", "json", "yaml"] = Field(default="table")


class AppConfig(BaseModel):
    """Main tasklane configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    checklist: ChecklistConfig = Field(default_factory=ChecklistConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
