from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from interaction_engine.core.errors import SkillExecutionError
from interaction_engine.executors.base import SkillExecutor
from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import ExecutionResult
from interaction_engine.schemas.skill import BindingKind

log = structlog.get_logger()


class NetworkExecutor(SkillExecutor):
    """Posts the actionable to the skill's endpoint and reads back its content."""

    binding = BindingKind.network

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport

    async def execute(self, actionable: Actionable) -> ExecutionResult:
        skill = actionable.skill
        if not skill.endpoint:
            raise SkillExecutionError(skill.id, "no endpoint configured")

        headers = {"Accept": "application/json, text/plain"}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(skill.endpoint, json=actionable.to_payload(), headers=headers)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("executor.network_failed", skill_id=skill.id, error=str(exc))
            raise SkillExecutionError(skill.id, str(exc)) from exc

        content_type = resp.headers.get("content-type", "text/plain")
        if content_type.startswith("application/json"):
            try:
                result = ExecutionResult.model_validate(resp.json())
            except (ValueError, ValidationError) as exc:
                raise SkillExecutionError(skill.id, f"invalid response body: {exc}") from exc
        else:
            result = ExecutionResult(
                content=resp.text,
                content_type=content_type.split(";", 1)[0].strip(),
                content_language=resp.headers.get("content-language", "en-US"),
            )

        log.info("executor.network_ok", skill_id=skill.id, status=resp.status_code)
        return result
