"""Health check response model"""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness answer polled by the desktop shell before enabling chat."""

    status: Literal["healthy"] = "healthy"
    service: str = Field(examples=["voisia-backend"])
    version: str = Field(examples=["0.1.0"])
    environment: str = Field(examples=["development"])
