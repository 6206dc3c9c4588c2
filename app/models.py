"""
Pydantic models for the Chat API.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    role: Role
    content: str


class Appointment(BaseModel):
    """Partial appointment record. Every field is optional until confirmation."""
    service: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None


class ChatRequest(BaseModel):
    # Missing history is not a schema error; the engine rejects it and
    # the endpoint answers with the apology message.
    messages: List[ChatMessage] = Field(default_factory=list)
    appointment: Optional[Appointment] = None


class ChatResponse(BaseModel):
    message: str
    appointment: Optional[Appointment] = None
