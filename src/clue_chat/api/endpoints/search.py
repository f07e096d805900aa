# src/clue_chat/api/endpoints/search.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from clue_chat.api.deps import get_pacing_policy
from clue_chat.assistant.streaming import PacingPolicy, stream_reply
from clue_chat.schemas.query import SearchRequest

router = APIRouter(tags=["Search"])
logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("")
async def search(
    request: SearchRequest,
    pacing: PacingPolicy = Depends(get_pacing_policy),
):
    """
    Streams the reply for a query as Server-Sent Events.
    Each record carries one character; the last record is {"type": "complete"}.
    """
    logger.info(f"Received search query: '{request.query[:50]}'")
    return StreamingResponse(
        stream_reply(request.query, pacing),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
