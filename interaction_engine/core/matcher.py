from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from interaction_engine.core.builder import LOCATION_PARAMETER, ActionableBuilder
from interaction_engine.core.dates import DateTimeParser, Span
from interaction_engine.core.errors import AmbiguousSkillMatchError, NoSkillMatchedError
from interaction_engine.core.registry import SkillRegistry
from interaction_engine.core.resolver import ParameterResolver
from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.skill import ParameterClass, Skill

log = structlog.get_logger()

# Order in which declared parameters are evaluated, and therefore queued.
RESOLUTION_ORDER = (
    ParameterClass.date_range,
    ParameterClass.quantity,
    ParameterClass.integer_value,
    ParameterClass.text,
)


def _hits(keywords: Iterable[str], utterance: str) -> int:
    return sum(1 for keyword in keywords if keyword in utterance)


def score(skill: Skill, utterance: str) -> int:
    """Count the skill's action, target and location keywords contained in the utterance."""
    return (
        _hits(skill.intent.actions, utterance)
        + _hits(skill.intent.targets, utterance)
        + _hits(skill.locations, utterance)
    )


def first_location(skill: Skill, utterance: str) -> str | None:
    for location in skill.locations:
        if location in utterance:
            return location
    return None


@dataclass(frozen=True)
class BestMatch:
    skill: Skill | None = None
    confidence: int = 0
    location: str | None = None


class IntentMatcher:
    def __init__(self, date_parser: DateTimeParser, resolver: ParameterResolver | None = None):
        self._date_parser = date_parser
        self._resolver = resolver or ParameterResolver()

    def best_match(self, utterance: str, skills: Iterable[Skill]) -> BestMatch:
        """Scan skills in order; the first strictly higher score wins, an equal nonzero score is ambiguous.

        The outcome depends on iteration order: a later skill tying the current best
        raises even if an even better skill would have followed.
        """
        best = BestMatch()
        for skill in skills:
            confidence = score(skill, utterance)
            if confidence <= 0:
                continue
            if confidence > best.confidence:
                best = BestMatch(
                    skill=skill,
                    confidence=confidence,
                    location=first_location(skill, utterance),
                )
            elif confidence == best.confidence:
                log.info(
                    "matcher.ambiguous",
                    skills=[best.skill.id, skill.id],
                    confidence=confidence,
                )
                raise AmbiguousSkillMatchError(utterance, [best.skill.id, skill.id], confidence)

        if best.skill is None:
            log.info("matcher.no_match", utterance=utterance)
            raise NoSkillMatchedError(utterance)
        return best

    def extract(self, utterance: str, registry: SkillRegistry) -> Actionable:
        text = utterance.strip().lower()
        log.debug("matcher.extract", utterance=text, skills=len(registry))

        span = self._date_parser.parse(text)
        best = self.best_match(text, registry.snapshot())
        builder = ActionableBuilder(best.skill, best.confidence)

        self._resolve_location(builder, best)
        self._resolve_parameters(builder, text, span)

        actionable = builder.build()
        log.info(
            "matcher.matched",
            skill_id=actionable.skill.id,
            confidence=actionable.confidence,
            location=actionable.location,
            missing=[p.name for p in actionable.missing],
        )
        return actionable

    def _resolve_location(self, builder: ActionableBuilder, best: BestMatch) -> None:
        locations = builder.skill.locations
        if not locations:
            return

        location = best.location
        if location is None and len(locations) == 1:
            location = locations[0]

        if location is not None:
            builder.set_location(location)
            return

        builder.require(LOCATION_PARAMETER)

    def _resolve_parameters(self, builder: ActionableBuilder, text: str, span: Span | None) -> None:
        for cls in RESOLUTION_ORDER:
            for parameter in builder.skill.get_parameters_by_class(cls):
                value = self._resolver.resolve(parameter, text, span)
                if value is not None:
                    builder.resolve(parameter, value)
                elif parameter.required:
                    builder.require(parameter)
