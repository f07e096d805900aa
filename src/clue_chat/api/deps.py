# src/clue_chat/api/deps.py
import logging
from functools import lru_cache

from clue_chat.assistant.streaming import PacingPolicy
from clue_chat.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pacing_policy() -> PacingPolicy:
    """Builds the stream pacing policy from settings once per process."""
    try:
        policy = PacingPolicy.from_settings(settings)
    except ValueError as e:
        logger.error(f"Invalid stream pacing configuration: {e}")
        raise RuntimeError(f"Could not configure stream pacing: {e}")
    logger.info(
        f"Stream pacing: initial={policy.initial_delay}s, "
        f"unit=[{policy.min_unit_delay}s, {policy.max_unit_delay}s), newline={policy.newline_delay}s"
    )
    return policy
