"""Writing styles and the shared generation algorithm.

Each style is data (a display name and an instruction preamble). One
algorithm, ``WritingStrategy.generate``, validates the input, builds the
request and hands it to the transport, whatever the style.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import ErrorKind, Failure, Outcome, Transport
from .config import AssistantConfig
from .request_builder import build_chat_request

# Output-length budget for every style
STRATEGY_MAX_TOKENS = 500


class StyleError(ValueError):
    """Unknown writing style."""

    pass


class WritingStyle(Enum):
    """The closed set of supported writing styles."""

    CREATIVE = (
        "Creative",
        "You are a creative writing assistant. Rewrite the user's text so it is "
        "vivid, imaginative and expressive. Reach for metaphor, sensory detail "
        "and a storyteller's pacing to make it memorable.",
    )
    PROFESSIONAL = (
        "Professional",
        "You are a professional writing assistant. Rewrite the user's text so it "
        "is clear, formal and appropriate for business. Keep a courteous tone, a "
        "logical structure and concise wording suited to workplace communication.",
    )
    ACADEMIC = (
        "Academic",
        "You are an academic writing assistant. Rewrite the user's text in a "
        "scholarly register. Use formal academic language and an objective tone, "
        "and format any references in a conventional citation style.",
    )

    def __init__(self, display_name: str, preamble: str):
        self.display_name = display_name
        self.preamble = preamble

    @classmethod
    def from_name(cls, name: str) -> WritingStyle:
        """Look up a style by display or member name, case-insensitively."""
        key = (name or "").strip().lower()
        for style in cls:
            if key in (style.display_name.lower(), style.name.lower()):
                return style
        raise StyleError(
            f"Unknown writing style: '{name}'. "
            f"Supported styles: {', '.join(s.display_name for s in cls)}"
        )


@dataclass(frozen=True)
class WritingStrategy:
    """A style bound to the transport and configuration it generates with.

    Strategies are immutable; changing style means swapping in another
    strategy, which never affects a call already dispatched.
    """

    style: WritingStyle
    transport: Transport
    config: AssistantConfig
    max_tokens: int = STRATEGY_MAX_TOKENS

    @property
    def name(self) -> str:
        return self.style.display_name

    @property
    def preamble(self) -> str:
        return self.style.preamble

    def generate(self, user_input: Optional[str]) -> Outcome:
        """Rewrite ``user_input`` in this strategy's style.

        Blank input is rejected without touching the transport.
        """
        if user_input is None or not user_input.strip():
            return Failure.of(ErrorKind.INVALID_INPUT)

        payload = build_chat_request(
            preamble=self.style.preamble,
            user_input=user_input,
            max_tokens=self.max_tokens,
            temperature=self.config.temperature,
        )
        return self.transport.send(payload, self.config)
