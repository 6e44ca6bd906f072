from __future__ import annotations

from typing import Any

from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.skill import ParameterClass, Skill, SkillParameter

LOCATION_PARAMETER = SkillParameter(name="location", cls=ParameterClass.location)


class ActionableBuilder:
    """Accumulates resolved and missing parameters for one matched skill.

    Keeps every parameter in at most one of the resolved mapping and the
    missing queue, and only accepts values for parameters the skill declares.
    """

    def __init__(self, skill: Skill, confidence: int):
        self._skill = skill
        self._confidence = confidence
        self._location: str | None = None
        self._parameters: dict[str, Any] = {}
        self._missing: list[SkillParameter] = []

    @property
    def skill(self) -> Skill:
        return self._skill

    def set_location(self, location: str) -> ActionableBuilder:
        self._location = location
        for parameter in self._skill.get_parameters_by_class(ParameterClass.location):
            self.resolve(parameter, location)
        return self

    def resolve(self, parameter: SkillParameter, value: Any) -> ActionableBuilder:
        if self._skill.get_parameter(parameter.name) != parameter:
            raise ValueError(
                f"Parameter '{parameter.name}' is not declared on skill '{self._skill.id}'"
            )
        self._missing = [p for p in self._missing if p.name != parameter.name]
        self._parameters[parameter.name] = value
        return self

    def require(self, parameter: SkillParameter) -> ActionableBuilder:
        if parameter.name in self._parameters:
            return self
        if any(p.name == parameter.name for p in self._missing):
            return self
        self._missing.append(parameter)
        return self

    def is_resolved(self, name: str) -> bool:
        return name in self._parameters

    def build(self) -> Actionable:
        return Actionable(
            skill=self._skill,
            confidence=self._confidence,
            location=self._location,
            parameters=dict(self._parameters),
            missing=list(self._missing),
        )
