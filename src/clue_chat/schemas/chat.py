import time
from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

_last_id_ms = 0


def new_time_id() -> str:
    """Millisecond timestamp id, bumped when two ids land in the same millisecond."""
    global _last_id_ms
    now_ms = int(time.time() * 1000)
    _last_id_ms = max(now_ms, _last_id_ms + 1)
    return str(_last_id_ms)


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    id: str = Field(default_factory=new_time_id)
    role: Role
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    streaming: bool = False


class Session(BaseModel):
    """One completed exchange: [user message, finalized assistant message]."""
    id: str = Field(default_factory=new_time_id)
    title: str
    created_at: datetime = Field(default_factory=datetime.now)
    messages: List[Message]


def make_title(text: str, max_chars: int = 50) -> str:
    """First `max_chars` characters of the text, with '...' appended when cut."""
    return text[:max_chars] + ("..." if len(text) > max_chars else "")
