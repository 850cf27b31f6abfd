"""Tests for the OpenAI analysis adapter."""

import asyncio
import json

import pytest
from pydantic import ValidationError

from nutriscan.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutriscan.domain.analysis import FoodAnalysisResult
from nutriscan.services.estimator import estimate_food

OATMEAL_OUTPUT = json.dumps(
    {
        "foodName": "Oatmeal",
        "calories": 310,
        "protein": 11,
        "carbs": 54,
        "fat": 6,
        "healthScore": 88,
        "bloodSugarImpact": [
            {"time": "0 min", "level": 85},
            {"time": "30 min", "level": 120},
            {"time": "60 min", "level": 112},
            {"time": "90 min", "level": 96},
        ],
        "explanation": "Slow-release carbohydrates and fiber.",
        "advice": None,
    }
)


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def _analyze(
    client: OpenAIAnalysisClient, reasoning_effort: str | None = None
) -> FoodAnalysisResult:
    return asyncio.run(
        client.analyze(
            model="gpt-4o",
            reasoning_effort=reasoning_effort,
            store=False,
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            prompt="Analyze this meal",
        )
    )


def test_openai_analysis_client_parses_output() -> None:
    fake = _FakeOpenAI(OATMEAL_OUTPUT)
    client = OpenAIAnalysisClient(client=fake)

    result = _analyze(client, reasoning_effort="low")

    assert result.food_name == "Oatmeal"
    assert result.calories == 310
    assert [point.level for point in result.blood_sugar_impact] == [85, 120, 112, 96]
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["text"]["format"]["name"] == "food_analysis"
    assert payload["text"]["format"]["strict"] is True
    assert payload["reasoning"] == {"effort": "low"}
    content = payload["input"][0]["content"]
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/jpeg;base64,ZmFrZQ==",
    }


def test_openai_analysis_client_omits_reasoning_by_default() -> None:
    fake = _FakeOpenAI(OATMEAL_OUTPUT)
    client = OpenAIAnalysisClient(client=fake)

    _analyze(client)

    assert fake.responses.last_payload is not None
    assert "reasoning" not in fake.responses.last_payload


def test_openai_analysis_client_rejects_empty_output() -> None:
    client = OpenAIAnalysisClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        _analyze(client)


def test_openai_analysis_client_rejects_incomplete_analysis() -> None:
    client = OpenAIAnalysisClient(
        client=_FakeOpenAI(json.dumps({"foodName": "Soup", "calories": 200}))
    )

    with pytest.raises(ValidationError):
        _analyze(client)


def test_openai_analysis_client_accepts_estimator_shape() -> None:
    expected = estimate_food("abc")
    output = expected.model_dump_json(by_alias=True)
    client = OpenAIAnalysisClient(client=_FakeOpenAI(output))

    assert _analyze(client) == expected


def test_openai_analysis_client_close() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAIAnalysisClient(client=fake)

    asyncio.run(client.close())

    assert fake.closed is True
