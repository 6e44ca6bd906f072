from datetime import datetime, timedelta

import pytest

from interaction_engine.config import EngineSettings
from interaction_engine.core.dates import Span
from interaction_engine.core.engine import InteractionEngine
from interaction_engine.core.matcher import IntentMatcher
from interaction_engine.core.registry import SkillRegistry
from interaction_engine.executors.base import SkillExecutor
from interaction_engine.executors.local import LocalExecutor
from interaction_engine.schemas.io import ExecutionResult
from interaction_engine.schemas.skill import BindingKind, Intent, ParameterClass, Skill, SkillParameter

TOMORROW = datetime(2025, 3, 2, 0, 0)


class FakeDateParser:
    """Returns a fixed span and remembers what it was asked to parse."""

    def __init__(self, span: Span | None = None):
        self.span = span
        self.calls: list[str] = []

    def parse(self, text: str) -> Span | None:
        self.calls.append(text)
        return self.span


class RecordingExecutor(SkillExecutor):
    binding = BindingKind.network

    def __init__(self, content: str = "Sunny, 21 degrees."):
        self.content = content
        self.calls = []

    async def execute(self, actionable):
        self.calls.append(actionable)
        return ExecutionResult(content=self.content, content_type="text/plain", content_language="en-US")


def make_skill(skill_id: str, actions=(), targets=(), locations=(), parameters=(), **kwargs) -> Skill:
    kwargs.setdefault("binding", BindingKind.local)
    kwargs.setdefault("name", skill_id.title())
    return Skill(
        id=skill_id,
        intent=Intent(actions=set(actions), targets=set(targets)),
        locations=list(locations),
        parameters=list(parameters),
        **kwargs,
    )


@pytest.fixture
def weather_skill():
    return make_skill(
        "weather.forecast",
        name="Weather Forecast",
        actions={"what", "how"},
        targets={"weather", "forecast"},
        parameters=[SkillParameter(name="when", cls=ParameterClass.date_range)],
        binding=BindingKind.network,
        endpoint="http://skills.test/weather",
    )


@pytest.fixture
def coffee_skill():
    return make_skill(
        "coffee.brew",
        name="Coffee Maker",
        actions={"make", "brew"},
        targets={"coffee"},
        locations=["kitchen"],
        parameters=[
            SkillParameter(name="sugar", cls=ParameterClass.quantity),
            SkillParameter(name="milk", cls=ParameterClass.quantity, required=False),
        ],
    )


@pytest.fixture
def lights_skill():
    return make_skill(
        "lights.switch",
        name="Lights",
        actions={"turn on", "switch", "dim"},
        targets={"light", "lamp"},
        locations=["kitchen", "lounge", "bedroom"],
        parameters=[SkillParameter(name="brightness", cls=ParameterClass.integer_value, required=False)],
    )


@pytest.fixture
def registry(weather_skill, coffee_skill, lights_skill):
    reg = SkillRegistry()
    for skill in (weather_skill, coffee_skill, lights_skill):
        reg.register(skill)
    return reg


@pytest.fixture
def tomorrow_span():
    return Span(start=TOMORROW, end=TOMORROW + timedelta(days=1))


@pytest.fixture
def date_parser():
    return FakeDateParser()


@pytest.fixture
def matcher(date_parser):
    return IntentMatcher(date_parser)


@pytest.fixture
def network_executor():
    return RecordingExecutor()


@pytest.fixture
def local_executor():
    def brew(actionable):
        return ExecutionResult(content=f"Coffee with {actionable.parameters['sugar']:g} sugar.")

    async def switch(actionable):
        return ExecutionResult(content=f"Lights in the {actionable.location}.")

    return LocalExecutor({"coffee.brew": brew, "lights.switch": switch})


@pytest.fixture
def engine(registry, date_parser, network_executor, local_executor):
    return InteractionEngine(
        settings=EngineSettings(executor_timeout_seconds=1.0, autoload_skills=False),
        registry=registry,
        date_parser=date_parser,
        executors={BindingKind.network: network_executor, BindingKind.local: local_executor},
    )
