"""Tests for the keyword FAQ."""

from learnhub.chat.faq import DEFAULT_REPLY, FAQ_ENTRIES, faq_reply


def test_matches_keyword_case_insensitively():
    assert faq_reply("How do I ENROLL now?") == FAQ_ENTRIES[2].reply


def test_first_matching_entry_wins():
    # "courses" matches the browse entry before the category entry
    reply = faq_reply("list the categories of courses")
    assert reply == FAQ_ENTRIES[1].reply


def test_empty_message_is_treated_as_help():
    help_entry = next(e for e in FAQ_ENTRIES if "help" in e.keywords)
    assert faq_reply("") == help_entry.reply
    assert faq_reply("   ") == help_entry.reply
    assert faq_reply(None) == help_entry.reply


def test_unmatched_message_gets_default_reply():
    assert faq_reply("qwerty zxcv") == DEFAULT_REPLY


def test_dashboard_question():
    assert "/dashboard" in faq_reply("where is my dashboard")
