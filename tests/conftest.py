"""Shared fixtures: fake clock, recording transport and configurations."""

from __future__ import annotations

import pytest

from generation.base import Success
from generation.config import AssistantConfig


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingTransport:
    """Transport stub that records payloads and returns a fixed outcome."""

    def __init__(self, outcome=None):
        self.outcome = outcome or Success("rewritten")
        self.calls = []

    def send(self, payload, config):
        self.calls.append((payload, config))
        return self.outcome


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def config() -> AssistantConfig:
    return AssistantConfig(endpoint="https://llm.example.test/v1/chat", api_key="test-key")


@pytest.fixture
def unconfigured_config() -> AssistantConfig:
    return AssistantConfig(endpoint="https://llm.example.test/v1/chat", api_key=None)
