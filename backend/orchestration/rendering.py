"""Presentation helpers for synthesized responses."""
from typing import Sequence

from orchestration.response_synthesizer import SynthesizedResponse
from orchestration.types import Message

FOLLOW_UP_HEADER = "**What would you like to do next?**"
BULLET = "•"


def render_suggestions(suggestions: Sequence[str]) -> str:
    if not suggestions:
        return ""
    items = "\n".join(f"{BULLET} {s}" for s in suggestions)
    return f"{FOLLOW_UP_HEADER}\n{items}"


def render_markdown(response: SynthesizedResponse) -> str:
    """Render body and follow-up block as one markdown string"""
    block = render_suggestions(response.suggestions)
    if not block:
        return response.body
    return f"{response.body}\n\n{block}"


def render_message(message: Message) -> str:
    """Render a stored response message (content plus its suggestions)"""
    return render_markdown(SynthesizedResponse(body=message.content, suggestions=message.suggestions))
