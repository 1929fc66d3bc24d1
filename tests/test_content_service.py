from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from grindworld.adapters import OpenAIContentService, TileRequest
from grindworld.adapters.content_service import TILE_FUNCTION, build_prompt
from grindworld.errors import ContentServiceError, ContentValidationError

URL = "https://llm.test/v1/chat/completions"
TILE = {
    "biome": "forest",
    "objects": [{"type": "tree", "position": {"x": 1, "y": 0, "z": 1}}],
    "description": "Quiet woods",
    "theme": "calm",
}


def _completion(name: str = "generate_map_tile", arguments: str | None = None) -> dict:
    return {
        "choices": [
            {
                "message": {
                    "role": "assistant",
                    "function_call": {"name": name, "arguments": arguments if arguments is not None else json.dumps(TILE)},
                }
            }
        ]
    }


def _service(handler) -> OpenAIContentService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIContentService(api_key="sk-test", base_url=URL, model="test-model", client=client)


def _request(**overrides) -> TileRequest:
    values = {"x": 1, "z": -2, "distance_from_origin": 2.236, "tile_size": 25.0}
    values.update(overrides)
    return TileRequest(**values)


def test_generate_posts_function_call_request_and_returns_arguments() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_completion())

    payload = asyncio.run(_service(handler).generate(_request(nearby_biomes=["lake"])))

    assert payload == TILE
    sent = captured[0]
    assert str(sent.url) == URL
    assert sent.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(sent.content)
    assert body["model"] == "test-model"
    assert body["function_call"] == {"name": "generate_map_tile"}
    assert body["functions"][0]["name"] == TILE_FUNCTION["name"]
    assert body["temperature"] == 0.8
    assert body["max_tokens"] == 1500
    assert "Nearby biomes: lake" in body["messages"][1]["content"]


def test_http_failure_raises_service_error() -> None:
    service = _service(lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(ContentServiceError):
        asyncio.run(service.generate(_request()))


def test_transport_failure_raises_service_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ContentServiceError):
        asyncio.run(_service(handler).generate(_request()))


@pytest.mark.parametrize(
    "body",
    [
        _completion(name="something_else"),
        _completion(arguments="{not json"),
        _completion(arguments="[1, 2]"),
        {"choices": []},
        {"id": "no-choices"},
    ],
)
def test_unexpected_completion_shapes_raise_validation_error(body: dict) -> None:
    service = _service(lambda request: httpx.Response(200, json=body))

    with pytest.raises(ContentValidationError):
        asyncio.run(service.generate(_request()))


def test_non_json_body_raises_validation_error() -> None:
    service = _service(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ContentValidationError):
        asyncio.run(service.generate(_request()))


def test_missing_credential_fails_before_any_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_completion())

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = OpenAIContentService(api_key="", base_url=URL, client=client)

    with pytest.raises(ContentServiceError):
        asyncio.run(service.generate(_request()))
    assert calls == []


def test_build_prompt_describes_tile_bounds_and_scenario() -> None:
    prompt = build_prompt(_request(scenario_prompt="Sunken harbor towns", scenario_theme="nautical"))

    assert "coordinates (1, -2)" in prompt
    assert "Scenario: Sunken harbor towns" in prompt
    assert "Theme: nautical" in prompt
    assert "(12.5 to 37.5, -62.5 to -37.5)" in prompt
    assert "Nearby biomes" not in prompt
