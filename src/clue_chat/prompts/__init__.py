# src/clue_chat/prompts/__init__.py
from clue_chat.prompts.meeting_reply import prompt as MEETING_REPLY
from clue_chat.prompts.tech_reply import prompt as TECH_REPLY
from clue_chat.prompts.fallback_reply import prompt_template as FALLBACK_REPLY_TEMPLATE

__all__ = [
    "MEETING_REPLY",
    "TECH_REPLY",
    "FALLBACK_REPLY_TEMPLATE",
]
