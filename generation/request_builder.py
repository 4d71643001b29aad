"""Builders for the wire-format request bodies.

All builders are pure: same arguments, same payload. Provider selection is
explicit (one named builder per shape), never inferred from the arguments.
"""

from __future__ import annotations

import json
import math
from typing import Any

from .base import Message

CHAT_MODEL = "command-a-03-2025"
LEGACY_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.7


def _check_max_tokens(max_tokens: int) -> int:
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        raise ValueError(f"max_tokens must be a positive integer, got {max_tokens!r}")
    return max_tokens


def _clamp_temperature(temperature: float) -> float:
    value = float(temperature)
    if not math.isfinite(value):
        return DEFAULT_TEMPERATURE
    return min(max(value, 0.0), 1.0)


def build_chat_request(
    preamble: str,
    user_input: str,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict[str, Any]:
    """Build a chat request with the instructions and message as separate fields.

    Args:
        preamble: System-style instructions steering the output.
        user_input: The text to rewrite.
        max_tokens: Response length limit.
        temperature: Sampling temperature, clamped to 0.0-1.0.

    Returns:
        Request body dictionary.
    """
    return {
        "model": CHAT_MODEL,
        "message": user_input,
        "preamble": preamble,
        "max_tokens": _check_max_tokens(max_tokens),
        "temperature": _clamp_temperature(temperature),
    }


def build_legacy_chat_request(
    system_prompt: str,
    user_message: str,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict[str, Any]:
    """Build a role-tagged multi-message request (system + user)."""
    messages = [
        Message(role="system", content=system_prompt),
        Message(role="user", content=user_message),
    ]
    return {
        "model": LEGACY_CHAT_MODEL,
        "max_tokens": _check_max_tokens(max_tokens),
        "temperature": _clamp_temperature(temperature),
        "messages": [{"role": m.role, "content": m.content} for m in messages],
    }


def build_completion_request(
    prompt: str,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict[str, Any]:
    """Build a plain completion request with a single prompt string."""
    return {
        "prompt": prompt,
        "max_tokens": _check_max_tokens(max_tokens),
        "temperature": _clamp_temperature(temperature),
    }


def serialize_payload(payload: dict[str, Any]) -> bytes:
    """Canonical JSON encoding of a payload."""
    return json.dumps(
        payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")
