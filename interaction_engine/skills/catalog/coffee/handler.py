from __future__ import annotations

from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import ExecutionResult


def brew(actionable: Actionable) -> ExecutionResult:
    sugar = actionable.parameters.get("sugar", 0.0)
    milk = actionable.parameters.get("milk")
    extras = [f"{sugar:g} sugar"]
    if milk:
        extras.append(f"{milk:g} milk")
    return ExecutionResult(
        content=f"Brewing a coffee in the {actionable.location} with {' and '.join(extras)}."
    )
