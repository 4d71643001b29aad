"""Per-request lifecycle for rewrites run off the caller's thread.

``GenerationOrchestrator.start`` returns a ``GenerationHandle`` whose event
channel carries at most two events, in order: ``GenerationStarted`` and then
exactly one terminal event (``GenerationSucceeded`` or ``GenerationFailed``).
Input rejected by the pre-flight check produces a single ``GenerationFailed``
and no asynchronous work.

Callers must not start a new request while one is in flight; the
orchestrator neither queues nor rejects overlapping starts. A caller that
allows overlap has to tolerate a terminal event arriving after it has moved on.
"""

from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Protocol, Union

from .base import ErrorKind, Success
from .request import GenerationRequest
from .strategies import WritingStrategy

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter some text first!"


class GenerationState(str, Enum):
    IDLE = "idle"
    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationStarted:
    request: GenerationRequest


@dataclass(frozen=True)
class GenerationSucceeded:
    request: GenerationRequest
    text: str


@dataclass(frozen=True)
class GenerationFailed:
    request: Optional[GenerationRequest]
    kind: ErrorKind
    message: str


GenerationEvent = Union[GenerationStarted, GenerationSucceeded, GenerationFailed]
TerminalEvent = Union[GenerationSucceeded, GenerationFailed]


class GenerationObserver(Protocol):
    """Notification sink implemented by the presentation layer."""

    def on_generation_started(self) -> None:
        ...

    def on_text_generated(self, generated_text: str) -> None:
        ...

    def on_generation_error(self, error_message: str) -> None:
        ...


class GenerationHandle:
    """Single-consumer channel for one request's lifecycle events."""

    def __init__(self) -> None:
        self._events: queue.Queue[GenerationEvent] = queue.Queue()
        self._state = GenerationState.IDLE
        self._terminal: Optional[TerminalEvent] = None

    @property
    def state(self) -> GenerationState:
        return self._state

    def _publish(self, event: GenerationEvent) -> None:
        if isinstance(event, GenerationStarted):
            self._state = GenerationState.STARTED
        elif isinstance(event, GenerationSucceeded):
            self._state = GenerationState.SUCCEEDED
        elif event.request is not None:
            self._state = GenerationState.FAILED
        self._events.put(event)

    def events(self, timeout: Optional[float] = None) -> Iterator[GenerationEvent]:
        """Yield events in delivery order, stopping after the terminal one.

        Args:
            timeout: Seconds to wait for each event. None waits indefinitely.

        Raises:
            queue.Empty: If an event does not arrive within ``timeout``.
        """
        if self._terminal is not None:
            return
        while True:
            event = self._events.get(timeout=timeout)
            yield event
            if not isinstance(event, GenerationStarted):
                self._terminal = event
                return

    def _require_terminal(self) -> TerminalEvent:
        if self._terminal is None:
            raise RuntimeError("Event stream ended without a terminal event")
        return self._terminal

    def result(self, timeout: Optional[float] = None) -> TerminalEvent:
        """Block until the terminal event and return it."""
        for _ in self.events(timeout=timeout):
            pass
        return self._require_terminal()

    def dispatch(self, observer: GenerationObserver, timeout: Optional[float] = None) -> TerminalEvent:
        """Forward every remaining event to ``observer`` and return the terminal event."""
        for event in self.events(timeout=timeout):
            if isinstance(event, GenerationStarted):
                observer.on_generation_started()
            elif isinstance(event, GenerationSucceeded):
                observer.on_text_generated(event.text)
            else:
                observer.on_generation_error(event.message)
        return self._require_terminal()


class GenerationOrchestrator:
    """Runs each rewrite on a worker thread and reports through a handle."""

    def __init__(self, executor: Optional[ThreadPoolExecutor] = None):
        """Initialize the orchestrator.

        Args:
            executor: Worker pool. If None, a single-worker pool is created
                      and shut down with the orchestrator.
        """
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="generation"
        )

    def __enter__(self) -> GenerationOrchestrator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def start(self, user_input: Optional[str], strategy: WritingStrategy) -> GenerationHandle:
        """Begin one request with the given strategy.

        The strategy is captured here; swapping the caller's active strategy
        afterwards does not affect this request.

        Args:
            user_input: Raw text from the user.
            strategy: Strategy to generate with.

        Returns:
            Handle delivering ``GenerationStarted`` then one terminal event,
            or only a ``GenerationFailed`` if the input is blank.
        """
        handle = GenerationHandle()

        if user_input is None or not user_input.strip():
            handle._publish(
                GenerationFailed(None, ErrorKind.INVALID_INPUT, EMPTY_INPUT_MESSAGE)
            )
            return handle

        request = GenerationRequest(user_input, strategy.name)
        handle._publish(GenerationStarted(request))
        logger.debug("Dispatching %r", request)

        try:
            self._executor.submit(self._run, handle, request, strategy)
        except RuntimeError as e:
            logger.error("Could not schedule generation: %s", e)
            handle._publish(
                GenerationFailed(request, ErrorKind.UNEXPECTED, f"Unexpected error: {e}")
            )
        return handle

    def _run(
        self,
        handle: GenerationHandle,
        request: GenerationRequest,
        strategy: WritingStrategy,
    ) -> None:
        try:
            outcome = strategy.generate(request.input_text)
            if isinstance(outcome, Success):
                event: TerminalEvent = GenerationSucceeded(request, outcome.text)
                logger.info("%s rewrite complete (%d chars)", request.style_name, len(outcome.text))
            else:
                event = GenerationFailed(request, outcome.kind, outcome.detail)
                logger.info("%s rewrite failed: %s", request.style_name, outcome.kind.value)
        except Exception as e:
            logger.exception("Generation raised for %r", request)
            event = GenerationFailed(request, ErrorKind.UNEXPECTED, f"Unexpected error: {e}")
        handle._publish(event)
