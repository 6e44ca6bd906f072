from __future__ import annotations

import importlib
import tomllib
from dataclasses import dataclass
from pathlib import Path

import structlog
from pydantic import ValidationError

from interaction_engine.core.engine import InteractionEngine
from interaction_engine.executors.local import LocalHandler
from interaction_engine.schemas.skill import BindingKind, Skill

log = structlog.get_logger()


@dataclass(frozen=True)
class SkillManifest:
    skill: Skill
    handler: str | None = None                  # "package.module:function", local skills only
    path: Path | None = None


def import_handler(reference: str) -> LocalHandler:
    """Resolve a ``module:function`` reference to a callable."""
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Handler reference must look like 'module:function', got {reference!r}")
    handler = getattr(importlib.import_module(module_name), attr)
    if not callable(handler):
        raise TypeError(f"Handler {reference!r} is not callable")
    return handler


def read_manifest(toml_path: Path) -> SkillManifest:
    with open(toml_path, "rb") as f:
        data = tomllib.load(f)

    skill_data = dict(data.get("skill", {}))
    handler = skill_data.pop("handler", None)
    skill = Skill.model_validate(skill_data)
    if skill.binding == BindingKind.local and not handler:
        raise ValueError(f"Local skill '{skill.id}' does not name a handler")
    return SkillManifest(skill=skill, handler=handler, path=toml_path)


def discover_manifests(skills_dir: Path) -> list[SkillManifest]:
    """Scan ``skills_dir`` subdirectories for skill.toml manifests, in name order.

    Manifests that fail to parse or validate are logged and skipped.
    """
    manifests: list[SkillManifest] = []

    if not skills_dir.is_dir():
        log.warning("skills directory not found", path=str(skills_dir))
        return manifests

    for skill_dir in sorted(skills_dir.iterdir()):
        if not skill_dir.is_dir():
            continue

        toml_path = skill_dir / "skill.toml"
        if not toml_path.exists():
            continue

        try:
            manifests.append(read_manifest(toml_path))
        except (tomllib.TOMLDecodeError, ValidationError, ValueError):
            log.exception("failed to load skill manifest", path=str(toml_path))

    return manifests


def discover_and_load_skills(engine: InteractionEngine, skills_dir: Path) -> list[Skill]:
    """Register every skill found under ``skills_dir`` with the engine.

    Local skills get their handler imported and attached to the engine's local
    executor; a skill whose handler cannot be imported is not registered.
    Returns the skills that were newly registered.
    """
    loaded: list[Skill] = []

    for manifest in discover_manifests(skills_dir):
        skill = manifest.skill
        if skill.id in engine.registry:
            log.debug("skill already registered", skill=skill.id)
            continue

        if skill.binding == BindingKind.local:
            local = engine.local_executor
            if local is None:
                log.warning("no local executor for skill", skill=skill.id)
                continue
            try:
                handler = import_handler(manifest.handler or "")
            except (ImportError, AttributeError, TypeError, ValueError):
                log.exception("failed to load skill handler", skill=skill.id, handler=manifest.handler)
                continue
            local.register_handler(skill.id, handler)

        if engine.register_skill(skill):
            loaded.append(skill)
            log.debug("loaded skill", skill=skill.id, binding=skill.binding)

    log.info("skill discovery complete", count=len(loaded), path=str(skills_dir))
    return loaded
