from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from interaction_engine.schemas.skill import ParameterClass, Skill, SkillParameter


class Actionable(BaseModel):
    """The outcome of matching one utterance: the skill, what was resolved, what is still missing.

    Built per request by ``ActionableBuilder`` and discarded after the response.
    """

    skill: Skill
    confidence: int = Field(default=0, ge=0)
    location: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    missing: list[SkillParameter] = Field(default_factory=list)

    def has_missing_parameters(self) -> bool:
        return bool(self.missing)

    def get_missing_parameters(self) -> list[SkillParameter]:
        return list(self.missing)

    def get_parameters_by_class(self, cls: ParameterClass) -> list[SkillParameter]:
        return self.skill.get_parameters_by_class(cls)

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe body sent to network executors."""
        return {
            "skill_id": self.skill.id,
            "confidence": self.confidence,
            "location": self.location,
            "parameters": {
                name: value.model_dump(mode="json") if isinstance(value, BaseModel) else value
                for name, value in self.parameters.items()
            },
            "missing": [p.name for p in self.missing],
        }
