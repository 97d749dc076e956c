"""Pydantic schemas for the health endpoint."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["healthy"])
    timestamp: str = Field(..., description="ISO-8601 UTC time", examples=["2024-01-01T00:00:00.000Z"])
    service: str
