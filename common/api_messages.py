# common/api_messages.py

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# --- Chat Payloads ---

class ChatMessage(BaseModel):
    """A single turn of the conversation, as sent by the chat UI."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str

class ChatRequest(BaseModel):
    """Body of POST /api/chat. The client is the source of truth for the plan."""
    model_config = ConfigDict(populate_by_name=True)

    # Optional here so that a missing message surfaces as InvalidInputError
    # (HTTP 400) rather than a schema error.
    message: Optional[str] = Field(default=None, description="The latest user message.")
    conversation_history: List[ChatMessage] = Field(
        default_factory=list,
        alias="conversationHistory",
        description="Prior turns in chronological order.",
    )
    # Anything other than a string resets the plan.
    current_app_plan: Optional[Any] = Field(
        default=None,
        alias="currentAppPlan",
        description="The plan the client currently displays, if any.",
    )

class ChatResponse(BaseModel):
    """Body of a successful POST /api/chat response."""
    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(..., description="The conversational reply shown to the user.")
    app_plan: Optional[str] = Field(
        default=None,
        alias="appPlan",
        description="The regenerated plan, omitted when none was produced.",
    )

# --- Service Payloads ---

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: Literal["OK"] = "OK"
    message: str = "Server is running"
