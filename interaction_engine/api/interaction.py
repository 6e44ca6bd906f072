from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from interaction_engine.core.engine import InteractionEngine
from interaction_engine.core.errors import (
    SkillExecutionError,
    SkillExecutionTimeoutError,
    UnsupportedContentTypeError,
)
from interaction_engine.dependencies import get_engine
from interaction_engine.schemas.io import (
    DeregisterSkillResponse,
    IOCombination,
    IOData,
    RegisterSkillResponse,
)
from interaction_engine.schemas.skill import Skill

log = structlog.get_logger()

router = APIRouter()

EngineDep = Annotated[InteractionEngine, Depends(get_engine)]


@router.get("/metadata")
async def get_metadata(engine: EngineDep):
    return engine.metadata.to_dict()


@router.get("/io-combinations", response_model=list[IOCombination])
async def get_io_combinations(engine: EngineDep):
    return sorted(
        engine.get_supported_io_combinations(),
        key=lambda c: (c.input.mime, c.input.language, c.output.mime, c.output.language),
    )


@router.get("/skills", response_model=list[Skill])
async def list_skills(engine: EngineDep):
    return engine.list_skills()


@router.post("/skills", response_model=RegisterSkillResponse, status_code=status.HTTP_201_CREATED)
async def register_skill(body: Skill, engine: EngineDep):
    if not engine.register_skill(body):
        raise HTTPException(status.HTTP_409_CONFLICT, f"Skill '{body.id}' is already registered")
    return RegisterSkillResponse(registered=True, skill_id=body.id)


@router.delete("/skills/{skill_id}", response_model=DeregisterSkillResponse)
async def deregister_skill(skill_id: str, engine: EngineDep):
    return DeregisterSkillResponse(removed=engine.deregister_skill(skill_id), skill_id=skill_id)


@router.post("/input", response_model=IOData)
async def process_input(body: IOData, engine: EngineDep):
    try:
        return await engine.process_input(body)
    except UnsupportedContentTypeError as exc:
        raise HTTPException(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, str(exc))
    except SkillExecutionTimeoutError as exc:
        raise HTTPException(status.HTTP_504_GATEWAY_TIMEOUT, str(exc))
    except SkillExecutionError as exc:
        log.warning("interaction.skill_failed", skill_id=exc.skill_id, reason=exc.reason)
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, str(exc))
