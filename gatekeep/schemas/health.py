"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field

DbStatus = Literal["connected", "disconnected"]


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: DbStatus | None = Field(
        default=None,
        description="Write database connectivity status when check is performed",
    )
    read_database: DbStatus | None = Field(
        default=None,
        description="Read database connectivity (same as database when no replica is configured)",
    )
