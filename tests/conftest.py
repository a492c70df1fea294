"""Pytest configuration and shared fixtures for the mdpreview test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from typing import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from mdpreview.highlighting import CodeSpan

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    """Timer double recording start/cancel calls; fired by the test."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function()


class RecordingTokenizer:
    """Code tokenizer that colors every ``def`` as a keyword and records its calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def tokenize(self, code: str, language: str) -> list[CodeSpan]:
        self.calls.append((code, language))
        spans = []
        start = code.find("def")
        while start != -1:
            spans.append(CodeSpan(start, start + 3, "keyword"))
            start = code.find("def", start + 3)
        return spans


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a manually advanced clock.

    Returns
    -------
    FakeClock
        Clock starting at t=100s; call ``advance()`` to move it

    """
    return FakeClock()


@pytest.fixture
def timers() -> list[FakeTimer]:
    """Provide a list collecting every timer created through ``timer_factory``."""
    return []


@pytest.fixture
def timer_factory(timers: list[FakeTimer]) -> Callable[[float, Callable[[], None]], FakeTimer]:
    """Provide a ``threading.Timer``-compatible factory creating fake timers."""

    def factory(interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        timers.append(timer)
        return timer

    return factory


@pytest.fixture
def recording_tokenizer() -> RecordingTokenizer:
    """Provide a deterministic code tokenizer that records its calls."""
    return RecordingTokenizer()


@pytest.fixture
def sample_markdown() -> str:
    """Provide a markdown document exercising most block kinds.

    Returns
    -------
    str
        Markdown source with headings, lists, task items, a table, code and a quote

    """
    return """# Project Notes

Some **bold** and *italic* text with `code`.

## Tasks

- [ ] write tests
- [x] design API
- [ ] ship it

1. first
2. second

| Name | Value |
|------|-------|
| a    | 1     |
| b    | 2     |

```python
def hello():
    return "world"
```

> Quoted text

---
"""
