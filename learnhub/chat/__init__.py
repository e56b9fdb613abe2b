"""LearnHub chat assistant."""

from .assistant import AssistantReply, answer
from .faq import DEFAULT_REPLY, FAQ_ENTRIES, faq_reply

__all__ = [
    "AssistantReply",
    "answer",
    "DEFAULT_REPLY",
    "FAQ_ENTRIES",
    "faq_reply",
]
