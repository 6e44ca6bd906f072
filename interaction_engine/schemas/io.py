from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TEXT_PLAIN = "text/plain"
EN_US = "en-US"


class MimeLanguage(BaseModel):
    model_config = ConfigDict(frozen=True)

    mime: str
    language: str


class IOData(BaseModel):
    """A payload moving in or out of the engine."""

    mime: str = Field(default=TEXT_PLAIN, description='Content type, e.g. "text/plain"')
    language: str = EN_US
    data: Any = None

    @property
    def is_text(self) -> bool:
        return self.mime.split(";", 1)[0].strip().lower() == TEXT_PLAIN

    @property
    def mime_language(self) -> MimeLanguage:
        return MimeLanguage(mime=self.mime, language=self.language)


class IOCombination(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: MimeLanguage
    output: MimeLanguage


class ExecutionResult(BaseModel):
    """What a skill executor hands back."""

    content: Any = None
    content_type: str = TEXT_PLAIN
    content_language: str = EN_US

    def to_io(self) -> IOData:
        return IOData(mime=self.content_type, language=self.content_language, data=self.content)


class RegisterSkillResponse(BaseModel):
    registered: bool
    skill_id: str


class DeregisterSkillResponse(BaseModel):
    removed: bool
    skill_id: str
