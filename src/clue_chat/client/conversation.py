# src/clue_chat/client/conversation.py
import json
import logging
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from clue_chat.client.state import ChatState, Tab
from clue_chat.config import settings
from clue_chat.memory.base import BaseKeyValueStore
from clue_chat.schemas.chat import Message, Role, Session, make_title

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class ConversationStateManager:
    """
    Owns the active conversation, the session history and the bookmark set.
    History and bookmarks are written through to the key/value store on every change.
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        state: Optional[ChatState] = None,
        history_key: str = settings.history_key,
        bookmarks_key: str = settings.bookmarks_key,
        history_limit: int = settings.history_limit,
        title_max_chars: int = settings.title_max_chars,
    ):
        self.store = store
        self.state = state or ChatState()
        self.history_key = history_key
        self.bookmarks_key = bookmarks_key
        self.history_limit = history_limit
        self.title_max_chars = title_max_chars

    # --- Rehydration ---

    def load(self) -> ChatState:
        """Restores sessions and bookmarks from the store, skipping corrupt records."""
        sessions = self._load_records(self.history_key, Session)
        self.state.sessions = sessions[: self.history_limit]
        bookmarks: List[Message] = []
        seen_ids = set()
        for message in self._load_records(self.bookmarks_key, Message):
            if message.id not in seen_ids:
                seen_ids.add(message.id)
                bookmarks.append(message)
        self.state.bookmarks = bookmarks
        logger.info(f"Loaded {len(self.state.sessions)} sessions and {len(self.state.bookmarks)} bookmarks.")
        return self.state

    def _load_records(self, key: str, model: Type[RecordT]) -> List[RecordT]:
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored value for '{key}' is not valid JSON, starting empty: {e}")
            return []
        if not isinstance(items, list):
            logger.warning(f"Stored value for '{key}' is not a list, starting empty.")
            return []

        records: List[RecordT] = []
        for index, item in enumerate(items):
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping corrupt {model.__name__} record #{index} under '{key}': {e.error_count()} errors")
        return records

    # --- Persistence ---

    def _save(self, key: str, records: List[BaseModel]):
        payload = json.dumps([record.model_dump(mode="json") for record in records], ensure_ascii=False)
        self.store.set(key, payload)

    def _save_history(self, sessions: List[Session]):
        self._save(self.history_key, sessions)
        self.state.sessions = sessions

    def _save_bookmarks(self, bookmarks: List[Message]):
        self._save(self.bookmarks_key, bookmarks)
        self.state.bookmarks = bookmarks

    # --- Active conversation ---

    def append_message(self, message: Message) -> Message:
        self.state.messages.append(message)
        return message

    def update_message(self, message_id: str, text: Optional[str] = None, streaming: Optional[bool] = None) -> bool:
        """
        Changes a message of the active conversation in place.
        Returns False when the message is no longer in the active conversation
        or has already been finalized.
        """
        message = self.state.find_message(message_id)
        if message is None:
            logger.debug(f"Message {message_id} is no longer in the active conversation, update skipped.")
            return False
        if not message.streaming:
            logger.warning(f"Message {message_id} is already finalized, update skipped.")
            return False
        if text is not None:
            message.text = text
        if streaming is not None:
            message.streaming = streaming
        return True

    def start_new_conversation(self):
        self.state.messages = []
        self.state.active_tab = Tab.CHAT
        logger.debug("Started a new conversation.")

    def load_conversation_from_session(self, session: Session):
        self.state.messages = [message.model_copy(deep=True) for message in session.messages]
        self.state.active_tab = Tab.CHAT
        logger.debug(f"Loaded session {session.id} into the active conversation.")

    def set_active_tab(self, tab: Tab):
        self.state.active_tab = Tab(tab)

    # --- History ---

    def commit_session(self, user_message: Message, assistant_message: Message) -> Session:
        """
        Records one completed exchange at the head of the history.
        Must be called exactly once per exchange; the oldest sessions beyond the limit are evicted.
        """
        session = Session(
            title=make_title(user_message.text, self.title_max_chars),
            messages=[user_message.model_copy(deep=True), assistant_message.model_copy(deep=True)],
        )
        self._save_history([session] + self.state.sessions[: self.history_limit - 1])
        logger.info(f"Committed session {session.id} '{session.title}' ({len(self.state.sessions)} in history)")
        return session

    # --- Bookmarks ---

    def is_bookmarked(self, message_id: str) -> bool:
        return any(bookmark.id == message_id for bookmark in self.state.bookmarks)

    def toggle_bookmark(self, message: Message) -> bool:
        """
        Adds the message to the bookmarks, or removes it if already there.
        Only finalized assistant messages can be bookmarked. Returns the new membership.
        """
        if message.role != Role.ASSISTANT:
            raise ValueError("Only assistant messages can be bookmarked.")
        if message.streaming:
            raise ValueError("A message cannot be bookmarked while it is still streaming.")

        if self.is_bookmarked(message.id):
            bookmarks = [b for b in self.state.bookmarks if b.id != message.id]
            bookmarked = False
        else:
            bookmarks = self.state.bookmarks + [message.model_copy(deep=True)]
            bookmarked = True
        self._save_bookmarks(bookmarks)
        logger.debug(f"Bookmark for message {message.id} {'added' if bookmarked else 'removed'}.")
        return bookmarked
