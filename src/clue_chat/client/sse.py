import codecs
import logging
from typing import Iterable, List

from clue_chat.schemas.events import SSE_DATA_PREFIX, StreamEvent, parse_event_line

logger = logging.getLogger(__name__)


class SseLineDecoder:
    """
    Incremental decoder for `data: <JSON>\\n\\n` records.

    Bytes are decoded with an incremental UTF-8 decoder and text is split on
    newlines; an unterminated trailing line stays buffered until the next chunk,
    so records split across reads are reassembled instead of lost.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.dropped = 0

    def feed(self, chunk: bytes) -> List[StreamEvent]:
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return self._parse(lines)

    def flush(self) -> List[StreamEvent]:
        """Parses whatever is left once the transport reports end of body."""
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._parse([tail])

    def _parse(self, lines: Iterable[str]) -> List[StreamEvent]:
        events: List[StreamEvent] = []
        for line in lines:
            line = line.rstrip("\r")
            if not line:
                continue
            event = parse_event_line(line)
            if event is None:
                self.dropped += 1
                if line.startswith(SSE_DATA_PREFIX):
                    logger.warning(f"Dropped malformed event record: {line[:80]!r}")
                else:
                    logger.debug(f"Ignored non-data line: {line[:80]!r}")
                continue
            events.append(event)
        return events
