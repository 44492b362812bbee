from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    sender: Sender
    timestamp: datetime


class ChatIn(BaseModel):
    session_id: str
    message: str
    # optional category label, e.g. "FIRE"
    category: Optional[str] = None

    @field_validator("message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class CategorySelectIn(BaseModel):
    session_id: str
    category: str


class CannedAskIn(BaseModel):
    session_id: str
    index: int = Field(ge=0)


class ChatOut(BaseModel):
    reply: str
    messages: List[Message] = Field(default_factory=list)


class HistoryOut(BaseModel):
    session_id: str
    busy: bool = False
    messages: List[Message] = Field(default_factory=list)
