"""Food photo analysis using LLM vision with a deterministic fallback."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutriscan.domain.analysis import AnalysisOutcome, FoodAnalysisResult
from nutriscan.services.estimator import estimate_food

logger = logging.getLogger(__name__)

_GLUCOSE_POINT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "time": {"type": "string", "enum": ["0 min", "30 min", "60 min", "90 min"]},
        "level": {"type": "number"},
    },
    "required": ["time", "level"],
    "additionalProperties": False,
}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodName": {"type": "string"},
        "calories": {"type": "integer", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "healthScore": {"type": "number", "minimum": 0, "maximum": 100},
        "bloodSugarImpact": {
            "type": "array",
            "items": _GLUCOSE_POINT_SCHEMA,
            "minItems": 4,
            "maxItems": 4,
        },
        "explanation": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "advice": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "foodName",
        "calories",
        "protein",
        "carbs",
        "fat",
        "healthScore",
        "bloodSugarImpact",
        "explanation",
        "advice",
    ],
    "additionalProperties": False,
}

ANALYSIS_PROMPT = (
    "You are a nutrition expert. Identify the food in the image and estimate "
    "its nutrition: calories, protein, carbs and fat in grams, and a health "
    "score from 0 to 100 where higher is healthier. Estimate the blood sugar "
    "level in mg/dL at 0, 30, 60 and 90 minutes after eating. Add a brief "
    "explanation of the nutritional value and brief advice about consumption."
)


class AnalysisClient(Protocol):
    """Interface for LLM food analysis."""

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
        """Return the parsed nutrition analysis for the image."""


@dataclass
class AnalysisService:
    """Service that analyzes meal photos and falls back to local estimates."""

    client: AnalysisClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_data: str) -> AnalysisOutcome:
        """Analyze an image, using the hash-seeded estimate if the model fails."""
        try:
            result = await self.client.analyze(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=to_data_url(image_data),
                schema=ANALYSIS_SCHEMA,
                prompt=ANALYSIS_PROMPT,
            )
        except ValidationError:
            logger.exception("Model returned an invalid analysis payload")
        except Exception:
            logger.exception("Food analysis request failed")
        else:
            return AnalysisOutcome(source="model", result=result)

        logger.info("Using fallback nutrition estimate")
        return AnalysisOutcome(source="fallback", result=estimate_food(image_data))


def to_data_url(image_data: str) -> str:
    """Return image data as a data URL, adding a header to bare base64."""
    if image_data.startswith("data:"):
        return image_data
    mime_type = _detect_mime_type(decode_image_data(image_data))
    return f"data:{mime_type};base64,{image_data}"


def decode_image_data(image_data: str) -> bytes:
    """Decode a base64 payload or data URL into raw bytes."""
    _, separator, payload = image_data.partition(",")
    encoded = payload if separator else image_data
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError("Image data is not valid base64") from exc


def detect_image_type(image_bytes: bytes) -> tuple[str, str]:
    """Return the MIME type and file extension for image bytes."""
    mime_type = _detect_mime_type(image_bytes)
    return mime_type, mime_type.removeprefix("image/").replace("jpeg", "jpg")


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
