# odoo_assistant/schemas.py
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatPart(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str


class ChatTurn(BaseModel):
    """Defines the structure for a single message in the history."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Literal["user", "model"]
    parts: List[ChatPart] = Field(..., min_length=1)

    @classmethod
    def from_text(cls, role: str, text: str) -> "ChatTurn":
        return cls(role=role, parts=[ChatPart(text=text)])


class ChatRequest(BaseModel):
    """Defines the structure for an incoming chat request from the frontend."""

    model_config = ConfigDict(populate_by_name=True)

    # Optional here so an absent message is answered with our own 400, not a 422
    message: Optional[str] = None
    conversation_history: Optional[List[ChatTurn]] = Field(
        default_factory=list, alias="conversationHistory"
    )


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    conversation_history: List[ChatTurn] = Field(..., alias="conversationHistory")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "OK"
