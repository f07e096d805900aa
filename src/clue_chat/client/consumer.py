# src/clue_chat/client/consumer.py
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

import httpx

from clue_chat.client.conversation import ConversationStateManager
from clue_chat.client.errors import StreamProtocolError, SubmissionRejected
from clue_chat.client.sse import SseLineDecoder
from clue_chat.client.state import ChatState
from clue_chat.config import settings
from clue_chat.schemas.chat import Message, Role
from clue_chat.schemas.events import CompleteEvent, StreamChunkEvent

logger = logging.getLogger(__name__)

ERROR_TEXT = "申し訳ございません。エラーが発生しました。"


class ConsumerPhase(str, Enum):
    IDLE = "idle"
    AWAITING_CHUNK = "awaiting_chunk"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"
    FAILED = "failed"


class StreamConsumer:
    """
    Sends one query at a time and folds the streamed reply into the active conversation.

    The in-progress assistant message grows with every received unit. On the
    completion record it is finalized and the exchange is committed to history;
    on any failure (transport, cancellation, unexpected error) it is finalized with
    ERROR_TEXT and nothing is committed.
    """

    def __init__(
        self,
        manager: ConversationStateManager,
        client: httpx.AsyncClient,
        search_path: str = settings.search_path,
        on_update: Optional[Callable[[Message], None]] = None,
    ):
        self.manager = manager
        self.client = client
        self.search_path = search_path
        self.on_update = on_update
        self.phase = ConsumerPhase.IDLE
        self.decoder = SseLineDecoder()

    @property
    def state(self) -> ChatState:
        return self.manager.state

    def can_submit(self, query: Optional[str] = None) -> bool:
        query = self.state.draft if query is None else query
        return bool(query.strip()) and not self.state.is_searching

    async def submit(self, query: Optional[str] = None) -> Message:
        """
        Sends `query` (or the current draft) and consumes the reply stream.
        Returns the finalized assistant message.
        """
        query = self.state.draft if query is None else query
        if not query.strip():
            raise SubmissionRejected("Query is empty.")
        if self.state.is_searching:
            raise SubmissionRejected("A reply is already streaming.")

        user_message = self.manager.append_message(Message(role=Role.USER, text=query))
        self.state.draft = ""
        self.state.is_searching = True
        self.state.streaming_text = ""
        assistant_message = self.manager.append_message(Message(role=Role.ASSISTANT, streaming=True))
        self._notify(assistant_message)

        try:
            reply = await self._consume(query, assistant_message)
        except (httpx.HTTPError, httpx.StreamError, StreamProtocolError) as e:
            logger.warning(f"Reply stream failed for query '{query[:50]}': {e}")
            self.phase = ConsumerPhase.FAILED
            return self._finalize(assistant_message, ERROR_TEXT)
        except asyncio.CancelledError:
            logger.warning(f"Reply stream cancelled for query '{query[:50]}'.")
            self.phase = ConsumerPhase.FAILED
            self._finalize(assistant_message, ERROR_TEXT, notify=False)
            raise
        except Exception as e:
            logger.error(f"Unexpected error while consuming the reply for query '{query[:50]}': {e}", exc_info=True)
            self.phase = ConsumerPhase.FAILED
            return self._finalize(assistant_message, ERROR_TEXT, notify=False)
        finally:
            self.state.is_searching = False
            self.state.streaming_text = ""

        final_message = self._finalize(assistant_message, reply)
        self.manager.commit_session(user_message, final_message)
        self.phase = ConsumerPhase.FINALIZED
        return final_message

    async def _consume(self, query: str, assistant_message: Message) -> str:
        """Reads the event stream until the completion record and returns the full reply text."""
        decoder = self.decoder = SseLineDecoder()
        accumulated = ""
        self.phase = ConsumerPhase.AWAITING_CHUNK

        async with self.client.stream("POST", self.search_path, json={"query": query}) as response:
            response.raise_for_status()
            content_type = response.headers.get("content-type", "")
            if not content_type.startswith("text/event-stream"):
                raise StreamProtocolError(f"Expected an event stream, got '{content_type or 'no content type'}'.")

            async for chunk in response.aiter_bytes():
                for event in decoder.feed(chunk):
                    if isinstance(event, CompleteEvent):
                        logger.info(f"Reply complete: {len(accumulated)} chars, {decoder.dropped} records dropped.")
                        return accumulated
                    if isinstance(event, StreamChunkEvent):
                        accumulated += event.content
                        self._show_progress(assistant_message, accumulated)
                self.phase = ConsumerPhase.AWAITING_CHUNK

            for event in decoder.flush():
                if isinstance(event, CompleteEvent):
                    return accumulated
                accumulated += event.content
                self._show_progress(assistant_message, accumulated)

        raise StreamProtocolError("Stream closed before the completion record.")

    def _show_progress(self, assistant_message: Message, accumulated: str):
        self.phase = ConsumerPhase.ACCUMULATING
        self.state.streaming_text = accumulated
        if self.manager.update_message(assistant_message.id, text=accumulated):
            self._notify(assistant_message)

    def _finalize(self, assistant_message: Message, text: str, notify: bool = True) -> Message:
        # The conversation may have been reset while the reply was streaming.
        if self.manager.update_message(assistant_message.id, text=text, streaming=False):
            if notify:
                self._notify(assistant_message)
            return assistant_message
        return assistant_message.model_copy(update={"text": text, "streaming": False})

    def _notify(self, message: Message):
        if self.on_update is not None:
            self.on_update(message)
