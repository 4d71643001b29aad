"""Base types shared by the generation layer.

This module defines the outcome of a generation attempt and the Transport
protocol that strategies call into. Using Python's Protocol for structural
subtyping lets tests hand in any fake with a matching ``send`` method.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from .config import AssistantConfig


@dataclass(frozen=True)
class Message:
    """A chat message."""

    role: str
    content: str


class ErrorKind(str, Enum):
    """Classification of a failed generation attempt."""

    UNCONFIGURED = "unconfigured"
    INVALID_INPUT = "invalid_input"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    CONNECTION_ERROR = "connection_error"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    SERVER_ERROR = "server_error"
    UNEXPECTED = "unexpected"

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ErrorKind.UNCONFIGURED: "API key not configured. Please set COHERE_API_KEY.",
    ErrorKind.INVALID_INPUT: "Please enter some text to transform.",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please wait and try again.",
    ErrorKind.UNAUTHORIZED: "Invalid API key. Please check your configuration.",
    ErrorKind.CONNECTION_ERROR: "Cannot connect to API. Check your internet connection.",
    ErrorKind.TIMEOUT: "Request timed out. Please try again.",
    ErrorKind.MALFORMED_RESPONSE: "Unexpected response format.",
    ErrorKind.SERVER_ERROR: "API returned an error.",
    ErrorKind.UNEXPECTED: "Unexpected error.",
}


@dataclass(frozen=True)
class Success:
    """Generated text from a completed request."""

    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A classified failure. ``detail`` is readable by end users."""

    kind: ErrorKind
    detail: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def of(cls, kind: ErrorKind, detail: str | None = None) -> Failure:
        return cls(kind=kind, detail=detail or kind.default_message)


Outcome = Union[Success, Failure]


@runtime_checkable
class Transport(Protocol):
    """Protocol for the single outbound channel to the text-generation endpoint."""

    def send(self, payload: dict[str, Any], config: AssistantConfig) -> Outcome:
        """Dispatch one payload and classify the result.

        Args:
            payload: Wire-format request body.
            config: Resolved configuration (endpoint and credential).

        Returns:
            ``Success`` with the trimmed generated text, or a ``Failure``.
            Implementations never raise for network or HTTP problems.
        """
        ...
