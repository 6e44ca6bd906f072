from __future__ import annotations

from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import ExecutionResult


async def switch(actionable: Actionable) -> ExecutionResult:
    room = actionable.parameters.get("room", actionable.location)
    brightness = actionable.parameters.get("brightness")
    if brightness is not None:
        return ExecutionResult(content=f"Setting the {room} lights to {brightness}.")
    return ExecutionResult(content=f"Switching the {room} lights.")
