"""Transport-neutral response shape shared by the FastAPI and Lambda surfaces."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class HandlerResponse(BaseModel):
    """Status, headers and body produced by one request leg."""

    status_code: int
    body: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    media_type: str = "text/plain"


__all__ = ["HandlerResponse"]
