"""Tests for the network and local skill executors."""

import json

import httpx
import pytest

from interaction_engine.core.builder import ActionableBuilder
from interaction_engine.core.errors import SkillExecutionError
from interaction_engine.executors.local import LocalExecutor
from interaction_engine.executors.network import NetworkExecutor
from interaction_engine.schemas.io import ExecutionResult


@pytest.fixture
def weather_actionable(weather_skill, tomorrow_span):
    when = weather_skill.get_parameter("when")
    return ActionableBuilder(weather_skill, 2).resolve(when, tomorrow_span.to_date_range()).build()


@pytest.mark.asyncio
async def test_network_executor_posts_actionable(weather_actionable):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"content": "Rain later.", "content_type": "text/plain", "content_language": "en-GB"},
        )

    executor = NetworkExecutor(transport=httpx.MockTransport(handler))
    result = await executor.execute(weather_actionable)

    assert result == ExecutionResult(
        content="Rain later.", content_type="text/plain", content_language="en-GB"
    )
    assert seen["url"] == "http://skills.test/weather"
    assert seen["body"]["skill_id"] == "weather.forecast"
    assert seen["body"]["parameters"]["when"]["start"] == "2025-03-02T00:00:00"


@pytest.mark.asyncio
async def test_network_executor_wraps_plain_text(weather_actionable):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            text="Cloudy.",
            headers={"content-type": "text/plain; charset=utf-8", "content-language": "en-US"},
        )

    executor = NetworkExecutor(transport=httpx.MockTransport(handler))
    result = await executor.execute(weather_actionable)

    assert result.content == "Cloudy."
    assert result.content_type == "text/plain"
    assert result.content_language == "en-US"


@pytest.mark.asyncio
async def test_network_executor_http_error(weather_actionable):
    executor = NetworkExecutor(
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="down"))
    )
    with pytest.raises(SkillExecutionError) as exc_info:
        await executor.execute(weather_actionable)
    assert exc_info.value.skill_id == "weather.forecast"


@pytest.mark.asyncio
async def test_network_executor_invalid_json(weather_actionable):
    executor = NetworkExecutor(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(
                200, content=b"{not json", headers={"content-type": "application/json"}
            )
        )
    )
    with pytest.raises(SkillExecutionError, match="invalid response body"):
        await executor.execute(weather_actionable)


@pytest.mark.asyncio
async def test_local_executor_runs_sync_and_async_handlers(coffee_skill, lights_skill):
    async def switch(actionable):
        return ExecutionResult(content="switched")

    executor = LocalExecutor({"coffee.brew": lambda a: ExecutionResult(content="brewed")})
    executor.register_handler("lights.switch", switch)

    coffee = await executor.execute(ActionableBuilder(coffee_skill, 2).build())
    lights = await executor.execute(ActionableBuilder(lights_skill, 2).build())

    assert coffee.content == "brewed"
    assert lights.content == "switched"


@pytest.mark.asyncio
async def test_local_executor_without_handler(coffee_skill):
    executor = LocalExecutor()
    assert not executor.has_handler("coffee.brew")

    with pytest.raises(SkillExecutionError, match="no local handler"):
        await executor.execute(ActionableBuilder(coffee_skill, 2).build())
