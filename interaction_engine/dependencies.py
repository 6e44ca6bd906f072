from __future__ import annotations

from functools import lru_cache

from interaction_engine.config import settings
from interaction_engine.core.engine import InteractionEngine
from interaction_engine.skills.loader import discover_and_load_skills


@lru_cache
def get_engine() -> InteractionEngine:
    engine = InteractionEngine(settings=settings)
    if settings.autoload_skills:
        discover_and_load_skills(engine, settings.skills_dir)
    return engine
