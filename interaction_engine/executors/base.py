from __future__ import annotations

from abc import ABC, abstractmethod

from interaction_engine.schemas.actionable import Actionable
from interaction_engine.schemas.io import ExecutionResult
from interaction_engine.schemas.skill import BindingKind


class SkillExecutor(ABC):
    binding: BindingKind

    @abstractmethod
    async def execute(self, actionable: Actionable) -> ExecutionResult:
        """Run the matched skill and return its content."""
