"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from socialtext import debug
from socialtext.buffer import StyledBuffer
from socialtext.editing import EditTracker
from socialtext.tokenizer import scan
from socialtext.tokens import Category, Token
from socialtext.view import SocialView


@pytest.fixture
def tok():
    """Return a helper that scans text with default patterns."""

    def _tok(text: str, enabled: Category | None = None) -> list[Token]:
        if enabled is None:
            return scan(text)
        return scan(text, enabled)

    return _tok


@pytest.fixture
def recorder():
    """Return (calls, listener): the listener appends (category, text) to calls."""
    calls: list[tuple[Category, str]] = []

    def _listener(category: Category, text: str) -> None:
        calls.append((category, text))

    return calls, _listener


@pytest.fixture
def typist():
    """Return a helper that feeds typed characters to an EditTracker."""

    def _type(tracker: EditTracker, text: str, chars: str) -> str:
        for ch in chars:
            pos = len(text)
            tracker.before_change(text, pos, 0)
            text = text + ch
            tracker.after_change(text, pos, 1)
        return text

    return _type


@pytest.fixture
def social():
    """Return a helper that builds a StyledBuffer with an attached SocialView."""

    def _social(text: str = "", **kwargs) -> tuple[StyledBuffer, SocialView]:
        buffer = StyledBuffer(text)
        return buffer, SocialView.attach(buffer, **kwargs)

    return _social


@pytest.fixture(autouse=True)
def _reset_debug():
    yield
    debug.set_debug(False)
