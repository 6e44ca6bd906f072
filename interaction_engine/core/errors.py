from __future__ import annotations


class InteractionError(Exception):
    """Base class for errors raised by the interaction engine."""


class NoSkillMatchedError(InteractionError):
    def __init__(self, utterance: str):
        super().__init__(f"No skill matched: {utterance!r}")
        self.utterance = utterance


class AmbiguousSkillMatchError(InteractionError):
    def __init__(self, utterance: str, skill_ids: list[str], confidence: int):
        super().__init__(
            f"Skills {', '.join(skill_ids)} tied at confidence {confidence} for {utterance!r}"
        )
        self.utterance = utterance
        self.skill_ids = skill_ids
        self.confidence = confidence


class UnsupportedContentTypeError(InteractionError):
    def __init__(self, mime: str):
        super().__init__(f"Unsupported content type: {mime}")
        self.mime = mime


class SkillExecutionError(InteractionError):
    def __init__(self, skill_id: str, reason: str):
        super().__init__(f"Skill '{skill_id}' failed: {reason}")
        self.skill_id = skill_id
        self.reason = reason


class SkillExecutionTimeoutError(SkillExecutionError):
    def __init__(self, skill_id: str, timeout: float):
        super().__init__(skill_id, f"timed out after {timeout:g}s")
        self.timeout = timeout
