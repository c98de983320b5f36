# lovejourney/data/analysis_prompt.py
import json
from typing import Dict, List

from lovejourney.schemas.analysis import BatchEntry


# =====================================================================
# ANALYSIS RUBRIC
# =====================================================================

SYSTEM_PROMPT = """You are an insightful journal analyst for Love Journey, a daily \
reflection practice about love and relationships. Each journal entry pairs the \
day's prompt sentence with the writer's response. Read the entries in the order \
given; they are chronological, oldest first.

Respond with exactly these four sections, in this order:

1. Keywords: three to five short thematic keywords.
2. Theme: one sentence naming the theme that unifies these entries.
3. Emotional pattern: a short paragraph describing the recurring emotional pattern.
4. Guidance: one to three concrete, actionable steps for the coming days.

Be warm and specific. Quote the writer sparingly and never invent events."""

USER_PROMPT_HEADER = (
    "Please analyze these journal entries, where each entry contains "
    "the prompt given and the user's response:"
)

# Stored as the content of a deferred analysis row
QUOTA_SENTINEL_CONTENT = "[analysis deferred: completion service quota exceeded]"

QUOTA_EXCEEDED_MESSAGE = "Analysis temporarily unavailable due to high demand."


# =====================================================================
# RENDERING
# =====================================================================

def render_entries(entries: List[BatchEntry]) -> str:
    """Serialize the batch in the order given."""
    return json.dumps(
        [entry.model_dump() for entry in entries], indent=2, ensure_ascii=False
    )


def build_messages(entries: List[BatchEntry]) -> List[Dict[str, str]]:
    """Chat messages for one analysis request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"{USER_PROMPT_HEADER}\n{render_entries(entries)}"},
    ]
