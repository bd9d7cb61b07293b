"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from osccodec import Bundle, Message, OscTime


@pytest.fixture
def sample_message() -> Message:
    """Message with an int and a string argument."""
    return Message(address="/foo").push(42).push("hi")


@pytest.fixture
def sample_time() -> OscTime:
    """A fixed, representable instant with sub-second precision."""
    return OscTime(when=datetime(2024, 1, 1, 12, 30, 15, 250000, tzinfo=timezone.utc))


@pytest.fixture
def nested_bundle(sample_message: Message, sample_time: OscTime) -> Bundle:
    """Bundle holding a message and a nested bundle holding another message."""
    inner = Bundle(time=OscTime.immediately()).push(Message(address="/inner").push(1.5))
    return Bundle(time=sample_time).push(sample_message).push(inner)
