"""Generation module for style-driven text rewriting.

This module turns a style selection and raw text into a rate-limited call to
a chat-style text-generation endpoint and reports the outcome asynchronously.

Styles:
    - Creative: vivid, imaginative rewrite
    - Professional: clear, formal business rewrite (default)
    - Academic: scholarly rewrite with an objective tone

Usage:
    from generation import (
        CohereTransport, GenerationOrchestrator, create_strategy, load_config,
    )
    config = load_config()
    strategy = create_strategy("creative", CohereTransport(), config)
    with GenerationOrchestrator() as orchestrator:
        terminal = orchestrator.start("my draft", strategy).result()
"""

from .api_client import CohereTransport, RateLimiter
from .base import ErrorKind, Failure, Message, Outcome, Success, Transport
from .config import AssistantConfig, load_config
from .factory import DEFAULT_STYLE, available_styles, create_strategy
from .orchestrator import (
    GenerationFailed,
    GenerationHandle,
    GenerationObserver,
    GenerationOrchestrator,
    GenerationStarted,
    GenerationState,
    GenerationSucceeded,
)
from .request import GenerationRequest
from .request_builder import (
    build_chat_request,
    build_completion_request,
    build_legacy_chat_request,
)
from .strategies import StyleError, WritingStrategy, WritingStyle

__all__ = [
    # Core types
    "ErrorKind",
    "Failure",
    "Message",
    "Outcome",
    "Success",
    "GenerationRequest",
    # Configuration
    "AssistantConfig",
    "load_config",
    # Transport
    "Transport",
    "CohereTransport",
    "RateLimiter",
    # Request builders
    "build_chat_request",
    "build_legacy_chat_request",
    "build_completion_request",
    # Strategies
    "WritingStyle",
    "WritingStrategy",
    "StyleError",
    "DEFAULT_STYLE",
    "available_styles",
    "create_strategy",
    # Orchestration
    "GenerationOrchestrator",
    "GenerationHandle",
    "GenerationObserver",
    "GenerationState",
    "GenerationStarted",
    "GenerationSucceeded",
    "GenerationFailed",
]
