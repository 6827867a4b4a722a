"""Pydantic schemas for knowledge card ingestion."""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_CARD_CONFIDENCE = 0.9


class CreateCardRequest(BaseModel):
    """Request schema for POST /api/cards/create.

    Blank or missing title/answer is reported as a 400 by the ingestion
    chain rather than a 422, and a non-numeric confidence falls back to
    the default.
    """

    title: str | None = Field(default=None, description="Card title")
    topics: list[str] | None = Field(default=None, description="Topic tags")
    answer: str | None = Field(default=None, description="Reusable answer text")
    confidence: Any = Field(default=None, description="Reliability in [0, 1]")


class CreateCardResponse(BaseModel):
    """Response schema for a created card."""

    ok: bool = True
    id: str = Field(..., description="Created card UUID")


class ErrorResponse(BaseModel):
    error: str
