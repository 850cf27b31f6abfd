"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutriscan.domain.analysis import FoodAnalysisResult
from nutriscan.domain.meals import MealRecord, StoredImage
from nutriscan.services.analysis import decode_image_data, detect_image_type

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(
        self, user_id: UUID, image_url: str | None, result: FoodAnalysisResult
    ) -> MealRecord:
        """Insert a meal and return the stored row."""

    def list_recent_meals(self, user_id: UUID, limit: int) -> list[MealRecord]:
        """Return the most recent meals, newest first."""


class ImageStorage(Protocol):
    """Blob storage for meal photos."""

    def upload(self, path: str, content: bytes, content_type: str) -> StoredImage:
        """Upload bytes and return a retrievable reference."""


@dataclass
class MealService:
    """Service that stores meal photos and logs analyzed meals."""

    repository: MealRepository
    storage: ImageStorage

    def save_meal(
        self, user_id: UUID, image_data: str, result: FoodAnalysisResult
    ) -> MealRecord:
        """Upload the captured image and persist the analysis as a meal.

        Raises ``ValueError`` when the image data cannot be decoded.
        """
        image_bytes = decode_image_data(image_data)
        content_type, extension = detect_image_type(image_bytes)
        timestamp_ms = int(datetime.now(tz=UTC).timestamp() * 1000)
        path = f"{user_id}/{timestamp_ms}.{extension}"
        stored = self.storage.upload(path, image_bytes, content_type)
        meal = self.repository.create_meal(user_id, stored.public_url, result)
        logger.info(
            "Meal saved", extra={"user_id": str(user_id), "meal_id": str(meal.id)}
        )
        return meal

    def list_recent(self, user_id: UUID, limit: int = 20) -> list[MealRecord]:
        """Return the user's recent meals."""
        return self.repository.list_recent_meals(user_id, limit)
