"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import Client, create_client

from nutriscan.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutriscan.adapters.supabase_auth_gateway import SupabaseAuthGateway
from nutriscan.adapters.supabase_image_storage import SupabaseImageStorage
from nutriscan.adapters.supabase_meal_repository import SupabaseMealRepository
from nutriscan.adapters.supabase_profile_repository import (
    SupabaseGoalRepository,
    SupabaseProfileRepository,
)
from nutriscan.adapters.supabase_stats_repository import SupabaseStatsRepository
from nutriscan.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from nutriscan.config import Settings
from nutriscan.services.analysis import AnalysisService
from nutriscan.services.meals import MealService
from nutriscan.services.profiles import GoalService, ProfileService
from nutriscan.services.stats import StatsService
from nutriscan.services.user_settings import UserSettingsService
from nutriscan.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    analysis_service: AnalysisService
    meal_service: MealService
    stats_service: StatsService
    profile_service: ProfileService
    goal_service: GoalService
    user_settings_service: UserSettingsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )

    def session_client() -> Client:
        return create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_anon_key
        )

    user_service = UserService(
        SupabaseAuthGateway(
            client=supabase_client, session_client_factory=session_client
        )
    )
    openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    meal_service = MealService(
        repository=SupabaseMealRepository(supabase_client),
        storage=SupabaseImageStorage(
            client=supabase_client, bucket=resolved_settings.meal_images_bucket
        ),
    )
    stats_service = StatsService(
        repository=SupabaseStatsRepository(supabase_client),
        blood_sugar_default=resolved_settings.blood_sugar_default,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        default_calorie_goal=resolved_settings.default_calorie_goal,
    )
    goal_service = GoalService(SupabaseGoalRepository(supabase_client))
    user_settings_service = UserSettingsService(
        repository=SupabaseUserSettingsRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        analysis_service=analysis_service,
        meal_service=meal_service,
        stats_service=stats_service,
        profile_service=profile_service,
        goal_service=goal_service,
        user_settings_service=user_settings_service,
        close_resources=close_resources,
    )
