from __future__ import annotations

import asyncio
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

import structlog

from interaction_engine.config import EngineSettings
from interaction_engine.core.clarifier import AMBIGUOUS_RESPONSE, NO_MATCH_RESPONSE, clarification_for
from interaction_engine.core.dates import DateparserTimeParser, DateTimeParser
from interaction_engine.core.errors import (
    AmbiguousSkillMatchError,
    NoSkillMatchedError,
    SkillExecutionError,
    SkillExecutionTimeoutError,
    UnsupportedContentTypeError,
)
from interaction_engine.core.matcher import IntentMatcher
from interaction_engine.core.registry import SkillRegistry
from interaction_engine.executors.base import SkillExecutor
from interaction_engine.executors.local import LocalExecutor
from interaction_engine.executors.network import NetworkExecutor
from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import (
    EN_US,
    TEXT_PLAIN,
    ExecutionResult,
    IOCombination,
    IOData,
    MimeLanguage,
)
from interaction_engine.schemas.module import ENGINE_METADATA, ModuleMetadata
from interaction_engine.schemas.skill import BindingKind, Skill

log = structlog.get_logger()

TEXT_EN_US = MimeLanguage(mime=TEXT_PLAIN, language=EN_US)


class RequestState(StrEnum):
    matching = "matching"
    clarifying = "clarifying"
    dispatching = "dispatching"
    responded = "responded"


def default_executors() -> dict[BindingKind, SkillExecutor]:
    return {
        BindingKind.network: NetworkExecutor(),
        BindingKind.local: LocalExecutor(),
    }


class InteractionEngine:
    """Matches text input to registered skills and either asks for what is missing or runs the skill.

    Each ``process_input`` call is independent; nothing about a request survives
    its response.
    """

    metadata: ModuleMetadata = ENGINE_METADATA

    def __init__(
        self,
        settings: EngineSettings | None = None,
        registry: SkillRegistry | None = None,
        date_parser: DateTimeParser | None = None,
        executors: Mapping[BindingKind, SkillExecutor] | None = None,
    ):
        self._settings = settings or EngineSettings()
        self._custom_date_parser = date_parser is not None
        self.registry = registry or SkillRegistry()
        self.matcher = IntentMatcher(date_parser or self._build_date_parser())
        self.executors: dict[BindingKind, SkillExecutor] = (
            dict(executors) if executors is not None else default_executors()
        )

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def configuration_type(self) -> type[EngineSettings]:
        return EngineSettings

    def configure(self, settings: EngineSettings | Mapping[str, Any]) -> None:
        """Apply new settings; mappings are validated into ``EngineSettings`` first."""
        if not isinstance(settings, EngineSettings):
            settings = EngineSettings(**dict(settings))
        self._settings = settings
        if not self._custom_date_parser:
            self.matcher = IntentMatcher(self._build_date_parser())
        log.info("engine.configured", timeout=settings.executor_timeout_seconds)

    def _build_date_parser(self) -> DateTimeParser:
        return DateparserTimeParser(
            languages=self._settings.date_languages,
            prefer_dates_from=self._settings.prefer_dates_from,
        )

    @property
    def local_executor(self) -> LocalExecutor | None:
        executor = self.executors.get(BindingKind.local)
        return executor if isinstance(executor, LocalExecutor) else None

    def register_skill(self, skill: Skill) -> bool:
        return self.registry.register(skill)

    def deregister_skill(self, skill_id: str) -> bool:
        return self.registry.deregister(skill_id)

    def list_skills(self) -> list[Skill]:
        return self.registry.list()

    def get_supported_io_combinations(self) -> set[IOCombination]:
        return {IOCombination(input=TEXT_EN_US, output=TEXT_EN_US)}

    async def process_input(self, payload: IOData, timeout: float | None = None) -> IOData:
        if not payload.is_text:
            log.warning("engine.unsupported_content", mime=payload.mime)
            raise UnsupportedContentTypeError(payload.mime)

        utterance = str(payload.data or "")
        log.debug("engine.state", state=RequestState.matching)
        try:
            actionable = self.matcher.extract(utterance, self.registry)
        except AmbiguousSkillMatchError as exc:
            return self._respond(AMBIGUOUS_RESPONSE, skills=exc.skill_ids)
        except NoSkillMatchedError:
            return self._respond(NO_MATCH_RESPONSE)

        if actionable.has_missing_parameters():
            log.debug("engine.state", state=RequestState.clarifying, skill_id=actionable.skill.id)
            return self._respond(clarification_for(actionable), skill_id=actionable.skill.id)

        log.debug("engine.state", state=RequestState.dispatching, skill_id=actionable.skill.id)
        result = await self._dispatch(actionable, timeout)
        log.debug("engine.state", state=RequestState.responded, skill_id=actionable.skill.id)
        return result.to_io()

    async def _dispatch(self, actionable: Actionable, timeout: float | None) -> ExecutionResult:
        skill = actionable.skill
        executor = self.executors.get(skill.binding)
        if executor is None:
            raise SkillExecutionError(skill.id, f"no executor for binding '{skill.binding}'")

        limit = timeout if timeout is not None else self._settings.executor_timeout_seconds
        try:
            return await asyncio.wait_for(executor.execute(actionable), timeout=limit)
        except TimeoutError as exc:
            log.error("engine.executor_timeout", skill_id=skill.id, timeout=limit)
            raise SkillExecutionTimeoutError(skill.id, limit) from exc

    def _respond(self, text: str, **context: Any) -> IOData:
        log.info("engine.respond", response=text, state=RequestState.responded, **context)
        return IOData(mime=TEXT_PLAIN, language=EN_US, data=text)
