import logging
from typing import Callable, List, Tuple

from clue_chat.prompts import MEETING_REPLY, TECH_REPLY, FALLBACK_REPLY_TEMPLATE

logger = logging.getLogger(__name__)


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda query: any(keyword in query for keyword in keywords)


# Evaluated in order; the first matching rule wins.
REPLY_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (_contains_any("定例", "会議"), MEETING_REPLY),
    (_contains_any("技術", "開発"), TECH_REPLY),
]


def generate_reply(query: str) -> str:
    """
    Returns the canned reply for a query.
    Falls back to a template echoing the query when no rule matches.
    """
    for index, (matches, reply) in enumerate(REPLY_RULES):
        if matches(query):
            logger.debug(f"Reply rule #{index} matched query '{query[:50]}'")
            return reply

    logger.debug(f"No reply rule matched query '{query[:50]}', using fallback.")
    return FALLBACK_REPLY_TEMPLATE.format(query=query)
