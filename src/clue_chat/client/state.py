from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from clue_chat.schemas.chat import Message, Session


class Tab(str, Enum):
    CHAT = "chat"
    HISTORY = "history"
    BOOKMARKS = "bookmarks"


class ChatState(BaseModel):
    """
    Everything the chat front end shows, in one serializable object.
    Passed to the stream consumer and the conversation manager instead of living in globals.
    """
    # Durable (mirrored to the key/value store)
    sessions: List[Session] = Field(default_factory=list)
    bookmarks: List[Message] = Field(default_factory=list)

    # Active view
    messages: List[Message] = Field(default_factory=list)
    active_tab: Tab = Tab.CHAT
    draft: str = ""
    is_searching: bool = False
    streaming_text: str = ""

    def find_message(self, message_id: str) -> Optional[Message]:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None
