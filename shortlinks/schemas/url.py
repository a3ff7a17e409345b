"""Response schemas for the Short Links Service."""

from pydantic import BaseModel


class URLSaveResponse(BaseModel):
    """Response model for a created short link."""

    status: str = "OK"
    alias: str
    id: int
    short_url: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
