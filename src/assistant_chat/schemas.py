"""API request models and the enumerations shared with the hosted platform."""

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    FUNCTION = "function"
    DATA = "data"


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class ChatRequest(BaseModel):
    conversation_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("conversationId", "threadId"),
        description="Server-side conversation; omit to start a new one",
    )
    message: str = Field(..., description="User message to append to the conversation")


class ConfigResponse(BaseModel):
    missingKeys: List[str] = Field(default_factory=list)
