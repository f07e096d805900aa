import json
from typing import Literal, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

SSE_DATA_PREFIX = "data: "


class StreamChunkEvent(BaseModel):
    """One unit of reply text."""
    content: str
    type: Literal["stream"] = "stream"


class CompleteEvent(BaseModel):
    """Terminal marker; always the last record of a response."""
    type: Literal["complete"] = "complete"


StreamEvent = Union[StreamChunkEvent, CompleteEvent]

_event_adapter = TypeAdapter(StreamEvent)


def encode_event(event: StreamEvent) -> str:
    """Frames one event as an SSE record: `data: <JSON>\\n\\n`."""
    payload = json.dumps(event.model_dump(), ensure_ascii=False)
    return f"{SSE_DATA_PREFIX}{payload}\n\n"


def parse_event_line(line: str) -> Optional[StreamEvent]:
    """
    Parses a single framed line into a StreamEvent.
    Returns None for blank lines, non-data lines and malformed payloads.
    """
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    try:
        return _event_adapter.validate_json(line[len(SSE_DATA_PREFIX):])
    except ValidationError:
        return None
