"""LearnHub assistant: LLM answer with FAQ fallback."""

import logging
from typing import Literal, TypedDict

import sentry_sdk

from ..config import get_llm_provider
from .faq import faq_reply
from .llm import complete_chat

logger = logging.getLogger(__name__)


class AssistantReply(TypedDict):
    reply: str
    source: Literal["llm", "faq"]


def _latest_user_message(messages: list[dict]) -> str:
    for message in reversed(messages):
        if message.get("role") == "user":
            return str(message.get("content") or "")
    return ""


async def answer(messages: list[dict]) -> AssistantReply:
    """
    Answer a chat conversation.

    Uses the configured LLM provider when there is one. Without a provider,
    or if the provider call fails, answers the latest user message from the
    FAQ instead.

    Args:
        messages: Conversation so far, oldest first

    Returns:
        {"reply": str, "source": "llm" | "faq"}
    """
    provider = get_llm_provider()
    if provider:
        try:
            reply = await complete_chat(messages, provider)
            return {"reply": reply, "source": "llm"}
        except Exception as e:
            logger.error(f"LLM call to {provider} failed, using FAQ: {e}")
            sentry_sdk.capture_exception(e)

    return {"reply": faq_reply(_latest_user_message(messages)), "source": "faq"}
