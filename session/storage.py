from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

HEADER_LINE = "=== Writing Assistant Session ==="
INPUT_MARKER = "--- Input ---"
OUTPUT_MARKER = "--- Output ---"
STRATEGY_PREFIX = "Strategy: "
TIMESTAMP_PREFIX = "Timestamp: "


class SessionError(Exception):
    """Error saving or loading a session file."""

    pass


@dataclass
class Session:
    """Input and output text of one rewrite, as saved to disk."""

    style: str
    input_text: str
    output_text: str
    saved_at: Optional[datetime] = field(default_factory=datetime.now)

    def is_empty(self) -> bool:
        return not self.input_text and not self.output_text


def session_filename(when: datetime) -> str:
    return f"session_{when.strftime('%Y%m%d_%H%M%S')}.txt"


def format_session(session: Session) -> str:
    saved_at = session.saved_at or datetime.now()
    lines = [
        HEADER_LINE,
        f"{STRATEGY_PREFIX}{session.style}",
        f"{TIMESTAMP_PREFIX}{saved_at.isoformat()}",
        "",
        INPUT_MARKER,
        session.input_text,
        "",
        OUTPUT_MARKER,
        session.output_text,
    ]
    return "\n".join(lines) + "\n"


def write_session(session: Session, path: Path) -> Path:
    """Write ``session`` to ``path``.

    Raises:
        SessionError: If there is nothing to save or the write fails.
    """
    if session.is_empty():
        raise SessionError("Nothing to save!")
    try:
        path.write_text(format_session(session), encoding="utf-8")
    except OSError as e:
        raise SessionError(f"Failed to save: {e}") from e
    logger.info("Saved session to %s", path)
    return path


def save_session(session: Session, directory: Union[str, Path] = ".") -> Path:
    """Save ``session`` under ``directory`` with a timestamped file name."""
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SessionError(f"Failed to save: {e}") from e
    return write_session(session, directory / session_filename(datetime.now()))


def _last_index(lines: List[str], marker: str, start: int) -> Optional[int]:
    for i in range(len(lines) - 1, start - 1, -1):
        if lines[i] == marker:
            return i
    return None


def parse_session(content: str) -> Session:
    """Parse the text written by ``format_session``.

    The first input marker and the last output marker after it delimit the
    sections, so input text may itself contain marker lines. Output text
    containing an output marker line is split at that line.
    """
    lines = content.splitlines()
    input_at = lines.index(INPUT_MARKER) if INPUT_MARKER in lines else None
    output_at = _last_index(lines, OUTPUT_MARKER, 0 if input_at is None else input_at + 1)

    header_end = len(lines)
    for marker_at in (input_at, output_at):
        if marker_at is not None:
            header_end = min(header_end, marker_at)

    input_lines: List[str] = []
    if input_at is not None:
        input_lines = lines[input_at + 1 : len(lines) if output_at is None else output_at]
    output_lines = [] if output_at is None else lines[output_at + 1 :]

    style = ""
    saved_at: Optional[datetime] = None
    for line in lines[:header_end]:
        if line.startswith(STRATEGY_PREFIX):
            style = line[len(STRATEGY_PREFIX):].strip()
        elif line.startswith(TIMESTAMP_PREFIX):
            try:
                saved_at = datetime.fromisoformat(line[len(TIMESTAMP_PREFIX):].strip())
            except ValueError:
                logger.warning("Unreadable session timestamp: %r", line)

    return Session(
        style=style,
        input_text="\n".join(input_lines).strip(),
        output_text="\n".join(output_lines).strip(),
        saved_at=saved_at,
    )


def load_session(path: Union[str, Path]) -> Session:
    """Load a session saved by ``save_session``.

    Input text containing marker lines is recovered intact (see ``parse_session``).

    Raises:
        SessionError: If the file cannot be read.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SessionError(f"Failed to load: {e}") from e
    logger.info("Loaded session from %s", path)
    return parse_session(content)
