"""Liveness response."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """GET /health. database tells whether DATABASE_URL is set, without connecting."""

    status: Literal["ok"] = "ok"
    version: str
    database: Literal["configured", "not_configured"]
