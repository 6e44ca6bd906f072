from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable

import structlog

from interaction_engine.core.errors import SkillExecutionError
from interaction_engine.executors.base import SkillExecutor
from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import ExecutionResult
from interaction_engine.schemas.skill import BindingKind

log = structlog.get_logger()

LocalHandler = Callable[[Actionable], ExecutionResult | Awaitable[ExecutionResult]]


class LocalExecutor(SkillExecutor):
    """Runs in-process handlers registered per skill id."""

    binding = BindingKind.local

    def __init__(self, handlers: dict[str, LocalHandler] | None = None):
        self._handlers: dict[str, LocalHandler] = dict(handlers or {})

    def register_handler(self, skill_id: str, handler: LocalHandler) -> None:
        self._handlers[skill_id] = handler

    def remove_handler(self, skill_id: str) -> None:
        self._handlers.pop(skill_id, None)

    def has_handler(self, skill_id: str) -> bool:
        return skill_id in self._handlers

    async def execute(self, actionable: Actionable) -> ExecutionResult:
        skill_id = actionable.skill.id
        handler = self._handlers.get(skill_id)
        if handler is None:
            raise SkillExecutionError(skill_id, "no local handler registered")

        if inspect.iscoroutinefunction(handler):
            result = await handler(actionable)
        else:
            # sync handlers run in a worker thread
            result = await asyncio.to_thread(handler, actionable)
            if inspect.isawaitable(result):
                result = await result
        log.info("executor.local_ok", skill_id=skill_id)
        return result
