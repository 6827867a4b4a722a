"""Pydantic schemas for the chat endpoint."""

from typing import Any

from pydantic import BaseModel, Field

from kbchat.core.retrieval_policy import Confidence


class ChatRequest(BaseModel):
    """Request schema for POST /api/chat."""

    question: str = Field(default="", description="Customer question to answer")


class CardMatch(BaseModel):
    """A knowledge card returned by match_knowledge_cards, with its similarity."""

    id: str = Field(..., description="Card UUID")
    title: str = Field(..., description="Card title")
    topics: list[str] = Field(default_factory=list, description="Topic tags")
    answer: str = Field(..., description="Grounded answer text")
    confidence: float | None = Field(default=None, description="Author-asserted reliability")
    source: dict[str, Any] = Field(default_factory=dict, description="Origin metadata")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Cosine similarity (0-1)")


class DebugCard(BaseModel):
    """Card summary shown in the debug panel."""

    id: str
    title: str
    similarity: float


class DebugInfo(BaseModel):
    cards: list[DebugCard] = Field(default_factory=list)


class PublicChatResponse(BaseModel):
    """Chat response for public deployments: the answer only."""

    answer: str


class DebugChatResponse(BaseModel):
    """Chat response for internal deployments, with retrieval detail."""

    answer: str
    confidence: Confidence
    debug: DebugInfo = Field(default_factory=DebugInfo)


ChatResponse = PublicChatResponse | DebugChatResponse
