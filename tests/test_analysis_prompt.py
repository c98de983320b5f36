"""Unit tests for analysis prompt rendering"""

import json

from lovejourney.data.analysis_prompt import (
    SYSTEM_PROMPT,
    USER_PROMPT_HEADER,
    build_messages,
)
from lovejourney.schemas.analysis import BatchEntry


def test_build_messages_renders_entries_in_order():
    entries = [
        BatchEntry(prompt="What made you smile?", response="Our walk", date="2024-01-01"),
        BatchEntry(prompt=None, response="Café talk ❤", date="2024-01-02"),
    ]

    system, user = build_messages(entries)

    assert system == {"role": "system", "content": SYSTEM_PROMPT}
    assert user["role"] == "user"
    header, _, payload = user["content"].partition("\n")
    assert header == USER_PROMPT_HEADER
    assert json.loads(payload) == [
        {"prompt": "What made you smile?", "response": "Our walk", "date": "2024-01-01"},
        {"prompt": None, "response": "Café talk ❤", "date": "2024-01-02"},
    ]
    assert "Café talk ❤" in payload


def test_system_prompt_asks_for_all_sections():
    for section in ("Keywords", "Theme", "Emotional pattern", "Guidance"):
        assert section in SYSTEM_PROMPT
