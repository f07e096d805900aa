import asyncio
import logging
import random
from typing import AsyncIterator, Awaitable, Callable, Iterator, Optional

from clue_chat.assistant.reply_generator import generate_reply
from clue_chat.config import Settings
from clue_chat.schemas.events import CompleteEvent, StreamChunkEvent, encode_event

logger = logging.getLogger(__name__)


class PacingPolicy:
    """
    Cosmetic typing delays for the reply stream, in seconds.

    - before the first unit: a fixed "thinking" delay
    - after a newline unit: a fixed, longer paragraph delay
    - after any other unit: uniformly random in [min, max)
    """

    def __init__(
        self,
        initial_delay: float = 0.5,
        min_unit_delay: float = 0.02,
        max_unit_delay: float = 0.07,
        newline_delay: float = 0.1,
        rng: Optional[random.Random] = None,
    ):
        if min(initial_delay, min_unit_delay, max_unit_delay, newline_delay) < 0:
            raise ValueError("Stream delays must not be negative.")
        if min_unit_delay > max_unit_delay:
            raise ValueError(
                f"min_unit_delay ({min_unit_delay}) is greater than max_unit_delay ({max_unit_delay})."
            )
        self.initial_delay = initial_delay
        self.min_unit_delay = min_unit_delay
        self.max_unit_delay = max_unit_delay
        self.newline_delay = newline_delay
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings) -> "PacingPolicy":
        return cls(
            initial_delay=settings.initial_delay_ms / 1000,
            min_unit_delay=settings.min_unit_delay_ms / 1000,
            max_unit_delay=settings.max_unit_delay_ms / 1000,
            newline_delay=settings.newline_delay_ms / 1000,
        )

    @classmethod
    def immediate(cls) -> "PacingPolicy":
        return cls(0, 0, 0, 0)

    def delay_after(self, unit: str) -> float:
        if unit == "\n":
            return self.newline_delay
        span = self.max_unit_delay - self.min_unit_delay
        return self.min_unit_delay + self.rng.random() * span


def split_units(text: str) -> Iterator[str]:
    """Single characters, newlines included."""
    return iter(text)


async def stream_reply(
    query: str,
    pacing: PacingPolicy,
    generate: Callable[[str], str] = generate_reply,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIterator[str]:
    """
    Yields the reply for `query` as SSE records, one character per record,
    followed by exactly one completion record.

    A failure while building or emitting the reply is logged and the stream
    still ends with the completion record.
    """
    units_sent = 0
    try:
        reply = generate(query)
        await sleep(pacing.initial_delay)
        for unit in split_units(reply):
            yield encode_event(StreamChunkEvent(content=unit))
            units_sent += 1
            await sleep(pacing.delay_after(unit))
    except Exception as e:
        logger.error(f"Reply stream failed after {units_sent} units: {e}", exc_info=True)

    logger.info(f"Reply stream complete: {units_sent} units sent.")
    yield encode_event(CompleteEvent())
