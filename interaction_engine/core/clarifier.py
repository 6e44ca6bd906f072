from __future__ import annotations

import structlog

from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.skill import ParameterClass

log = structlog.get_logger()

AMBIGUOUS_RESPONSE = (
    "Multiple skills matched what you said. Could you be more specific about what you want?"
)
NO_MATCH_RESPONSE = "Sorry, no skill could be matched to what you said."


def human_join(items: list[str], conjunction: str = "or") -> str:
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def clarification_for(actionable: Actionable) -> str:
    """Build the prompt asking for the first missing parameter.

    Parameters of the same class still missing are named together, so one
    question covers e.g. both "sugar" and "milk".
    """
    first = actionable.missing[0]
    same_class = [p.name for p in actionable.missing if p.cls == first.cls]
    names = human_join(same_class, "and")

    if first.cls == ParameterClass.location:
        prompt = f"Which location did you mean: {human_join(actionable.skill.locations)}?"
    elif first.cls == ParameterClass.date_range:
        prompt = f"What date or time should I use for {actionable.skill.name}?"
    elif first.cls == ParameterClass.quantity:
        prompt = f"How much {names} would you like?"
    elif first.cls == ParameterClass.integer_value:
        prompt = f"What number should I use for {names}?"
    else:
        count = len(actionable.missing)
        noun = "parameter" if count == 1 else "parameters"
        missing = human_join([p.name for p in actionable.missing], "and")
        prompt = f"I'm missing {count} {noun} to do that: {missing}."

    log.info(
        "clarifier.prompt",
        skill_id=actionable.skill.id,
        parameter=first.name,
        parameter_class=first.cls,
    )
    return prompt
