"""Tests for span extraction with the dateparser-backed parser."""

from datetime import datetime, timedelta

import pytest

from interaction_engine.core.dates import DateparserTimeParser, Span, _period_start

# Wednesday
NOW = datetime(2026, 10, 21, 10, 30)


@pytest.fixture
def parser():
    return DateparserTimeParser(languages=["en"], clock=lambda: NOW)


@pytest.mark.parametrize(
    "period, expected",
    [
        ("day", datetime(2026, 10, 21)),
        ("week", datetime(2026, 10, 19)),
        ("month", datetime(2026, 10, 1)),
        ("year", datetime(2026, 1, 1)),
    ],
)
def test_period_start(period, expected):
    assert _period_start(NOW, period) == expected


def test_tomorrow_spans_the_whole_day(parser):
    span = parser.parse("what's the weather tomorrow")
    assert span == Span(start=datetime(2026, 10, 22), end=datetime(2026, 10, 23))


def test_next_week_starts_on_monday(parser):
    span = parser.parse("what's the weather next week")
    assert span.start == datetime(2026, 10, 26)
    assert span.start.weekday() == 0
    assert span.width == timedelta(weeks=1)


def test_next_month_starts_on_the_first(parser):
    span = parser.parse("what's the weather next month")
    assert span == Span(start=datetime(2026, 11, 1), end=datetime(2026, 12, 1))


def test_now_is_a_point(parser):
    span = parser.parse("what's the weather now")
    assert span.width == timedelta(0)
    assert span.start.date() == NOW.date()