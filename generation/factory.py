"""Factory functions for creating writing strategies.

This module maps style names (as typed by a user or passed on the command
line) to ``WritingStrategy`` instances. The default style is Professional.
"""

from __future__ import annotations

from typing import Optional, Union

from .api_client import CohereTransport
from .base import Transport
from .config import AssistantConfig, load_config
from .strategies import WritingStrategy, WritingStyle

# Style used when none is selected
DEFAULT_STYLE = WritingStyle.PROFESSIONAL


def create_strategy(
    style: Union[WritingStyle, str, None] = None,
    transport: Optional[Transport] = None,
    config: Optional[AssistantConfig] = None,
) -> WritingStrategy:
    """Create a strategy for the given style.

    Args:
        style: A WritingStyle or style name ("creative", "Professional", ...).
               If None, uses DEFAULT_STYLE.
        transport: Transport to send requests with. If None, a new
                   CohereTransport is created.
        config: Configuration. If None, loads it with ``load_config()``.

    Returns:
        A strategy bound to the transport and configuration.

    Raises:
        StyleError: If the style name is unknown.

    Examples:
        config = load_config()
        transport = CohereTransport()
        strategy = create_strategy("academic", transport, config)
        outcome = strategy.generate("the results were good")
    """
    if style is None:
        style = DEFAULT_STYLE
    elif not isinstance(style, WritingStyle):
        style = WritingStyle.from_name(style)

    return WritingStrategy(
        style=style,
        transport=transport if transport is not None else CohereTransport(),
        config=config if config is not None else load_config(),
    )


def available_styles() -> list[str]:
    """Get style display names in declaration order."""
    return [style.display_name for style in WritingStyle]
