from __future__ import annotations

import threading

import structlog

from interaction_engine.schemas.skill import Skill

log = structlog.get_logger()


class SkillRegistry:
    """Skills keyed by id, iterated in insertion order.

    Mutations are expected from a single writer; readers take a snapshot so a
    matching pass always sees one consistent, stably ordered view.
    """

    def __init__(self) -> None:
        self._skills: dict[str, Skill] = {}
        self._lock = threading.Lock()

    def register(self, skill: Skill) -> bool:
        with self._lock:
            if skill.id in self._skills:
                log.warning("registry.duplicate", skill_id=skill.id)
                return False
            self._skills[skill.id] = skill
        log.info("registry.registered", skill_id=skill.id, binding=skill.binding)
        return True

    def deregister(self, skill_id: str) -> bool:
        with self._lock:
            removed = self._skills.pop(skill_id, None)
            absent = skill_id not in self._skills
        if removed is not None:
            log.info("registry.deregistered", skill_id=skill_id)
        return absent

    def get(self, skill_id: str) -> Skill | None:
        with self._lock:
            return self._skills.get(skill_id)

    def snapshot(self) -> tuple[Skill, ...]:
        with self._lock:
            return tuple(self._skills.values())

    def list(self) -> list[Skill]:
        return list(self.snapshot())

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills
