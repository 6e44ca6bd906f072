from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class BindingKind(StrEnum):
    network = "network"
    local = "local"


class ParameterClass(StrEnum):
    date_range = "date_range"
    quantity = "quantity"
    integer_value = "integer_value"
    location = "location"
    text = "text"


def _normalize_keywords(values: list[str] | set[str]) -> list[str]:
    normalized = []
    for value in values:
        keyword = value.strip().lower()
        if not keyword:
            raise ValueError("keywords must not be empty")
        normalized.append(keyword)
    return normalized


class Intent(BaseModel):
    """Action and target keywords, matched as substrings of the lowercased utterance."""

    actions: set[str] = Field(default_factory=set)
    targets: set[str] = Field(default_factory=set)

    @field_validator("actions", "targets", mode="before")
    @classmethod
    def lowercase_keywords(cls, value: list[str] | set[str]) -> set[str]:
        return set(_normalize_keywords(value))


class SkillParameter(BaseModel):
    name: str = Field(..., min_length=1)
    cls: ParameterClass = Field(..., alias="class")
    required: bool = True

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip().lower()
        if not name:
            raise ValueError("parameter name must not be blank")
        return name


class DateRange(BaseModel):
    """A start/end pair extracted from the utterance; both unset means no date was found."""

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


class Skill(BaseModel):
    id: str = Field(..., min_length=1, description='Unique skill id, e.g. "weather.forecast"')
    name: str
    author: str = ""
    description: str = ""
    version: str = "1.0.0"
    intent: Intent = Field(default_factory=Intent)
    locations: list[str] = Field(default_factory=list)
    parameters: list[SkillParameter] = Field(default_factory=list)
    binding: BindingKind = BindingKind.network
    endpoint: str | None = Field(
        default=None, description="URL the network executor posts actionables to"
    )
    help: str = ""

    @field_validator("locations", mode="before")
    @classmethod
    def lowercase_locations(cls, value: list[str]) -> list[str]:
        return _normalize_keywords(value)

    @model_validator(mode="after")
    def check_parameters(self) -> Skill:
        names = [p.name for p in self.parameters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate parameter names: {', '.join(duplicates)}")
        if self.binding == BindingKind.network and not self.endpoint:
            raise ValueError("network skills require an endpoint")
        return self

    def get_parameters_by_class(self, cls: ParameterClass) -> list[SkillParameter]:
        return [p for p in self.parameters if p.cls == cls]

    def get_parameter(self, name: str) -> SkillParameter | None:
        for p in self.parameters:
            if p.name == name:
                return p
        return None
