"""OpenAI Responses API client for food analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutriscan.domain.analysis import FoodAnalysisResult
from nutriscan.services.analysis import AnalysisClient

RESPONSE_FORMAT_NAME = "food_analysis"


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> FoodAnalysisResult:
        """Call OpenAI Responses API and parse the structured food analysis.

        Raises ``pydantic.ValidationError`` when the output does not match
        ``FoodAnalysisResult``.
        """
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": RESPONSE_FORMAT_NAME,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return FoodAnalysisResult.model_validate_json(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
