from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

import structlog
from dateparser.date import DateDataParser
from dateparser.search import search_dates
from dateutil.relativedelta import relativedelta

from interaction_engine.schemas.skill import DateRange

log = structlog.get_logger()


@dataclass(frozen=True)
class Span:
    start: datetime | None = None
    end: datetime | None = None

    @property
    def width(self) -> timedelta | None:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    def to_date_range(self) -> DateRange:
        return DateRange(start=self.start, end=self.end)


class DateTimeParser(Protocol):
    def parse(self, text: str) -> Span | None: ...


_PERIOD_LENGTHS = {
    "day": relativedelta(days=1),
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
    "year": relativedelta(years=1),
}


def _period_start(moment: datetime, period: str) -> datetime:
    start = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        start -= timedelta(days=start.weekday())
    elif period == "month":
        start = start.replace(day=1)
    elif period == "year":
        start = start.replace(month=1, day=1)
    return start


class DateparserTimeParser:
    """Finds the first date/time expression in free text using dateparser.

    A time-of-day expression or "now" yields a zero-width span at that moment; a coarser
    expression ("tomorrow", "next week") spans the whole period, weeks starting on Monday.
    """

    def __init__(
        self,
        languages: list[str] | None = None,
        prefer_dates_from: str = "future",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._languages = languages or ["en"]
        self._prefer_dates_from = prefer_dates_from
        self._clock = clock

    def _settings(self, **extra) -> dict:
        return {
            "PREFER_DATES_FROM": self._prefer_dates_from,
            "RELATIVE_BASE": self._clock(),
            **extra,
        }

    def parse(self, text: str) -> Span | None:
        found = search_dates(text, languages=self._languages, settings=self._settings())
        if not found:
            return None

        fragment, moment = found[0]
        period = "day"
        data = DateDataParser(
            languages=self._languages,
            settings=self._settings(RETURN_TIME_AS_PERIOD=True),
        ).get_date_data(fragment)
        if data.date_obj is not None:
            moment = data.date_obj
            period = data.period or period

        if fragment.strip().lower() == "now":
            period = "time"

        if period in _PERIOD_LENGTHS:
            start = _period_start(moment, period)
            span = Span(start=start, end=start + _PERIOD_LENGTHS[period])
        else:
            span = Span(start=moment, end=moment)

        log.debug("dates.parsed", fragment=fragment, period=period, start=span.start, end=span.end)
        return span
