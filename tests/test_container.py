"""Tests for container wiring."""

import asyncio

from nutriscan.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.analysis_service is not None
    assert container.stats_service.blood_sugar_default == settings.blood_sugar_default
    assert container.profile_service.default_calorie_goal == 2000
    asyncio.run(container.close_resources())
