"""LearnHub assistant API routes.

Endpoints:
- POST /api/chat - Answer a conversation (LLM, with FAQ fallback)
- POST /api/chat/faq - Keyword FAQ answer only
"""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from learnhub.chat import answer, faq_reply

router = APIRouter(prefix="/api/chat", tags=["chat"])


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage]


class FaqRequest(BaseModel):
    message: str = ""


@router.post("")
async def chat(body: ChatRequest):
    return await answer([message.model_dump() for message in body.messages])


@router.post("/faq")
async def chat_faq(body: FaqRequest):
    return {"reply": faq_reply(body.message)}
