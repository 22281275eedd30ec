"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class ConvertResponse(BaseModel):
    display: dict[str, Any] | None = Field(default=None, description="Serialized root display, null when empty")
    command: str | None = Field(default=None, description="Summon command for the root display")
    command_length: int = 0
    command_too_long: bool = False
    polygon_count: int = 0
    vertex_count: int = 0
    display_count: int = 0
    processing_time_ms: float = 0.0
    errors: dict[str, str] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
