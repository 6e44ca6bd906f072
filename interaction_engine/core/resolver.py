from __future__ import annotations

import math
from typing import Any, Literal

import inflection
import structlog

from interaction_engine.core.dates import Span
from interaction_engine.schemas.skill import ParameterClass, SkillParameter

log = structlog.get_logger()

Direction = Literal["before", "after"]

_TRAILING_PUNCTUATION = ",;:!?"

# Where to look for the number relative to the parameter name.
NUMBER_DIRECTIONS: dict[ParameterClass, Direction] = {
    ParameterClass.quantity: "before",      # "2 sugars"
    ParameterClass.integer_value: "after",  # "volume 7"
}


def alternate_number(word: str) -> str:
    """Return the plural of a singular word, or the singular of a plural one."""
    singular = inflection.singularize(word)
    if singular != word and inflection.pluralize(singular) == word:
        return singular
    return inflection.pluralize(word)


def _parse_number(token: str) -> float | None:
    try:
        value = float(token.rstrip(_TRAILING_PUNCTUATION))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def find_mention(name: str, utterance: str) -> tuple[int, int] | None:
    """Locate ``name`` (or its other grammatical number) in the utterance as (start, end)."""
    for candidate in (name, alternate_number(name)):
        index = utterance.find(candidate)
        if index != -1:
            return index, index + len(candidate)
    return None


def number_near(name: str, utterance: str, direction: Direction) -> float | None:
    """Find the first number before/after the mention of ``name``.

    Returns None when the name is not mentioned at all, and 0.0 when it is
    mentioned without any parseable number in the scan direction.
    """
    mention = find_mention(name, utterance)
    if mention is None:
        return None

    start, end = mention
    if direction == "before":
        tokens = reversed(utterance[:start].split())
    else:
        tokens = iter(utterance[end:].split())

    for token in tokens:
        value = _parse_number(token)
        if value is not None:
            return value
    return 0.0


class ParameterResolver:
    """Resolves one declared parameter against a normalized utterance.

    Location parameters are settled by the matcher from the skill's location
    keywords and are never resolved here.
    """

    def resolve(self, parameter: SkillParameter, utterance: str, span: Span | None) -> Any | None:
        if parameter.cls == ParameterClass.date_range:
            if span is None or span.is_empty:
                return None
            return span.to_date_range()

        direction = NUMBER_DIRECTIONS.get(parameter.cls)
        if direction is None:
            return None

        value = number_near(parameter.name, utterance, direction)
        if value is None:
            return None
        if parameter.cls == ParameterClass.integer_value:
            value = int(value)
        log.debug("resolver.number", parameter=parameter.name, value=value, direction=direction)
        return value
