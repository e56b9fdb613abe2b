"""
Keyword FAQ for the LearnHub assistant.

Used on its own by the /api/chat/faq endpoint, and as the fallback when no
LLM provider is configured or the provider call fails.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FaqEntry:
    keywords: tuple[str, ...]
    reply: str


# First match wins, so more specific entries go first
FAQ_ENTRIES: list[FaqEntry] = [
    FaqEntry(
        ("hello", "hi", "hey", "howdy"),
        "Hi! I'm the LearnHub assistant. You can ask me about courses, how to "
        "sign up, enroll, save courses, or use your dashboard.",
    ),
    FaqEntry(
        ("course", "courses", "browse", "find", "explore"),
        "You can browse all courses at **/courses**. Each course shows "
        "duration, enrollment count, and category. Click **View Course** to "
        "see lessons and enroll.",
    ),
    FaqEntry(
        ("enroll", "enrollment", "join", "take a course"),
        "To enroll: go to **Courses**, open a course, then use **Enroll** on "
        "the course page. Your progress is saved automatically. You can "
        "continue from your **Dashboard**.",
    ),
    FaqEntry(
        ("sign up", "register", "account", "create account"),
        "Create an account at **/auth/signup**. After signing up you can "
        "browse courses, enroll, save courses, and track your progress.",
    ),
    FaqEntry(
        ("login", "log in", "sign in"),
        "Log in at **/auth/login** with your email and password.",
    ),
    FaqEntry(
        ("dashboard",),
        "Your **Dashboard** is at **/dashboard** when you're logged in. There "
        "you can see your enrolled courses and continue learning.",
    ),
    FaqEntry(
        ("save", "saved", "bookmark", "later"),
        "You can save courses for later from the course page. View all saved "
        "courses at **/saved**.",
    ),
    FaqEntry(
        ("progress", "track", "continue", "resume"),
        "LearnHub tracks your progress in each course. Open the course from "
        "your **Dashboard** or **/courses/[id]** and continue from where you "
        "left off. Lesson progress is saved automatically.",
    ),
    FaqEntry(
        ("lesson", "lessons", "video", "watch"),
        "Lessons are inside each course. Open a course and go to "
        "**/courses/[courseId]/lessons/[lessonId]** to watch and complete "
        "lessons.",
    ),
    FaqEntry(
        ("admin", "manage", "user", "instructor"),
        "Admins can manage users and courses. Admin features are in the "
        "**/admin** area.",
    ),
    FaqEntry(
        ("category", "categories"),
        "Courses are organized by categories. You can filter or browse by "
        "category on the **Courses** page.",
    ),
    FaqEntry(
        ("help", "support", "what can you do"),
        "I can help with: finding courses, signing up, logging in, enrolling, "
        "saving courses, your dashboard, progress, and admin features. Just "
        "ask in your own words!",
    ),
]

DEFAULT_REPLY = (
    "I can help with LearnHub: courses, enrollment, sign up, login, dashboard, "
    'saved courses, and progress. Try asking something like "How do I enroll?" '
    'or "Where is my dashboard?"'
)


def faq_reply(message: str | None) -> str:
    """
    Reply from the first FAQ entry whose keyword appears in the message.

    Matching is a case-insensitive substring check. An empty message is
    answered as if the user asked for help.
    """
    text = (message or "").strip().lower() or "help"
    for entry in FAQ_ENTRIES:
        if any(keyword in text for keyword in entry.keywords):
            return entry.reply
    return DEFAULT_REPLY
