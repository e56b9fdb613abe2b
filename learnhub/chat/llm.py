"""
LLM provider abstraction using LiteLLM.

One non-streaming completion call, provider-agnostic. The model string comes
from learnhub.config.get_llm_provider().
"""

from litellm import acompletion

LEARNHUB_SYSTEM_PROMPT = """You are the friendly AI assistant for LearnHub, an online course platform. Your role is to help visitors and students with questions about the platform.

LearnHub features:
- **Courses**: Browse and explore courses by category. Each course has lessons, duration, and enrollment count.
- **Students** can: sign up, log in, browse courses, enroll in courses (with progress tracking), save courses for later, and view their dashboard.
- **Admins** can: manage users and courses.
- **Navigation**: Home (/), Courses (/courses), Dashboard (/dashboard) when logged in, Saved (/saved), Login (/auth/login), Sign up (/auth/signup). Course detail pages are at /courses/[id], lessons at /courses/[id]/lessons/[lessonId].

Keep responses concise, helpful, and focused on the platform. If asked about something outside LearnHub, briefly answer but steer the conversation back to how LearnHub can help. Do not make up course names or URLs; suggest they browse the Courses page."""


async def complete_chat(
    messages: list[dict],
    provider: str,
    system: str = LEARNHUB_SYSTEM_PROMPT,
    max_tokens: int = 1024,
) -> str:
    """
    Get a single chat completion.

    Args:
        messages: List of {"role": "user"|"assistant", "content": str}
        provider: Model string like "anthropic/claude-sonnet-4-6"
        system: System prompt
        max_tokens: Maximum tokens in response

    Returns:
        The assistant's reply text
    """
    # LiteLLM uses OpenAI-style messages with system as a message
    llm_messages = [{"role": "system", "content": system}] + messages

    response = await acompletion(
        model=provider,
        messages=llm_messages,
        max_tokens=max_tokens,
    )
    return response.choices[0].message.content or ""
