"""AI query DTOs."""

from pydantic import BaseModel, Field


class AskAIRequest(BaseModel):
    """Question sent from the dashboard chat."""

    query: str = Field(default="", max_length=1000)


class AIQueryResult(BaseModel):
    """Answer (or failure) from the AI query service."""

    success: bool
    response: str | None = None
    error: str | None = None
