"""Shared fixtures for all tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

# Widths of a made-up proportional font: narrow and wide letters differ, so
# truncation cannot be predicted from character counts.
_NARROW = set('ijltfrI.,: ')
_WIDE = set('mwMW')


def fake_width(c):
    if c in _NARROW:
        return 3
    if c in _WIDE:
        return 9
    if c.isdigit():
        return 6
    if c.isupper():
        return 7
    return 5


def fake_measure(text, style=None):
    bold = isinstance(style, dict) and style.get('bold')
    return sum(fake_width(c) + (1 if bold else 0) for c in text)


class CountingMeasure:
    def __init__(self):
        self.calls = []

    def __call__(self, text, style=None):
        self.calls.append(text)
        return fake_measure(text, style)


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def counting_measure():
    return CountingMeasure()


@pytest.fixture
def example_table():
    """Factory fixture returning the First/Second table used throughout the tests."""
    from vtable.util.table import ColumnSpec, build_table

    def _make(payloads=('yes', 'more', 'foo'), measure=fake_measure):
        columns = [ColumnSpec('First', 10), ColumnSpec('Second')]
        rows = [
            ['A thing', 'Yes'],
            ['A wide thing that needs chopping', 'And more'],
            ['And the last one', 'Foo'],
        ]
        return build_table(columns, rows, list(payloads), measure=measure)

    return _make


@pytest.fixture
def mock_ctx():
    """Returns a mocked Discord Context object."""
    ctx = MagicMock()
    ctx.send = AsyncMock()
    ctx.author = MagicMock()
    ctx.author.id = 12345
    ctx.message = MagicMock()
    ctx.message.author = ctx.author
    ctx.message.attachments = []
    ctx.channel = MagicMock()
    ctx.channel.id = 777
    return ctx
