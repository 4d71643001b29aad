from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class GenerationRequest:
    """One user-triggered rewrite: trimmed input plus the style name.

    Equality and hashing cover ``input_text`` and ``style_name`` only, so two
    requests for the same text and style are equal whenever they were made.
    """

    input_text: str
    style_name: str
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self) -> None:
        if self.input_text is None or not self.input_text.strip():
            raise ValueError("Input cannot be null or empty")
        if self.style_name is None or not self.style_name.strip():
            raise ValueError("Strategy name cannot be null or empty")
        object.__setattr__(self, "input_text", self.input_text.strip())
        object.__setattr__(self, "style_name", self.style_name.strip())

    def __repr__(self) -> str:
        return (
            f"GenerationRequest(style_name={self.style_name!r}, "
            f"created_at={self.created_at.isoformat()})"
        )
