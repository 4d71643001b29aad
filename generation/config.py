"""Configuration for the writing assistant's generation client."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.cohere.ai/v1/chat"
DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7

# Environment variables
API_KEY_ENV = "COHERE_API_KEY"
CONFIG_PATH_ENV = "WRITING_ASSISTANT_CONFIG"
DEFAULT_CONFIG_FILE = "config.properties"


@dataclass(frozen=True)
class AssistantConfig:
    """Resolved configuration. Immutable once loaded."""

    endpoint: str = DEFAULT_ENDPOINT
    api_key: Optional[str] = field(default=None, repr=False)
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


def _parse_int(raw: Optional[str], key: str, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Invalid value for %s: %r; using %d", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value for %s: %r; using %d", key, raw, default)
        return default
    return value


def _parse_temperature(raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        logger.warning("Invalid value for temperature: %r; using %.2f", raw, default)
        return default
    if not math.isfinite(value):
        logger.warning("Invalid value for temperature: %r; using %.2f", raw, default)
        return default
    return min(max(value, 0.0), 1.0)


def _read_properties(path: Path) -> Mapping[str, Optional[str]]:
    if not path.is_file():
        logger.warning(
            "%s not found. Falling back to environment variables.", path
        )
        return {}
    try:
        return dotenv_values(path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error loading %s: %s", path, e)
        return {}


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    """Pick the properties file: explicit path, then env var, then cwd default."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path(DEFAULT_CONFIG_FILE)


def load_config(
    path: Union[str, Path, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AssistantConfig:
    """Load configuration from a properties file with an env var fallback.

    Resolution order:
        1. ``api.key``, ``api.endpoint``, ``max.tokens``, ``temperature``
           from the properties file.
        2. ``COHERE_API_KEY`` for the credential only, when the file has none.
        3. Built-in defaults for everything else.

    Never raises. A missing file or malformed numbers degrade to defaults,
    and a missing credential yields an unconfigured (but valid) config.

    Args:
        path: Properties file. If None, uses WRITING_ASSISTANT_CONFIG or
              ./config.properties.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The resolved configuration.
    """
    environ = os.environ if environ is None else environ
    props = _read_properties(resolve_config_path(path))

    api_key = (props.get("api.key") or "").strip()
    if not api_key:
        api_key = (environ.get(API_KEY_ENV) or "").strip()

    endpoint = (props.get("api.endpoint") or "").strip() or DEFAULT_ENDPOINT

    config = AssistantConfig(
        endpoint=endpoint,
        api_key=api_key or None,
        max_tokens=_parse_int(props.get("max.tokens"), "max.tokens", DEFAULT_MAX_TOKENS),
        temperature=_parse_temperature(props.get("temperature"), DEFAULT_TEMPERATURE),
    )
    if not config.is_configured():
        logger.warning("No API key found; generation is disabled until %s is set.", API_KEY_ENV)
    return config
