"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from nutriscan.api.auth import current_user
from nutriscan.api.auth import router as auth_router
from nutriscan.api.models import (
    AnalyzeRequest,
    DashboardOut,
    GoalsIn,
    GoalsOut,
    MealOut,
    SaveMealRequest,
    TimezoneIn,
)
from nutriscan.app_logging import configure_logging
from nutriscan.config import parse_allowed_origins
from nutriscan.containers import AppContainer
from nutriscan.domain.analysis import AnalysisOutcome
from nutriscan.domain.models import AuthUser
from nutriscan.domain.profiles import Profile

MAX_HISTORY = 100


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="NutriScan", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/analyze")
    async def analyze(
        payload: AnalyzeRequest,
        request: Request,
        user: AuthUser = Depends(current_user),
    ) -> AnalysisOutcome:
        """Estimate nutrition for a captured meal photo."""
        state_container: AppContainer = request.app.state.container
        if not payload.image_data or not payload.image_data.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No image data provided",
            )
        outcome = await state_container.analysis_service.analyze(payload.image_data)
        logger.info(
            "Analyzed meal photo",
            extra={"user_id": str(user.id), "source": outcome.source},
        )
        return outcome

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    def save_meal(
        payload: SaveMealRequest,
        request: Request,
        user: AuthUser = Depends(current_user),
    ) -> MealOut:
        """Upload the meal photo and add the meal to the user's log."""
        state_container: AppContainer = request.app.state.container
        if not payload.image_data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing data for saving meal",
            )
        try:
            meal = state_container.meal_service.save_meal(
                user.id, payload.image_data, payload.result
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except Exception as exc:
            logger.exception("Failed to save meal", extra={"user_id": str(user.id)})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=_format_error(state_container, exc, "Error saving meal."),
            ) from exc
        return MealOut.from_record(meal)

    @app.get("/meals")
    def list_meals(
        request: Request, limit: int = 20, user: AuthUser = Depends(current_user)
    ) -> list[MealOut]:
        """Return the user's most recent meals."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_service.list_recent(
            user.id, limit=max(1, min(limit, MAX_HISTORY))
        )
        return [MealOut.from_record(meal) for meal in meals]

    @app.get("/dashboard")
    def dashboard(
        request: Request, user: AuthUser = Depends(current_user)
    ) -> DashboardOut:
        """Return today's stats and the weekly overview."""
        state_container: AppContainer = request.app.state.container
        timezone = state_container.user_settings_service.get_timezone(user.id)
        calorie_goal = state_container.profile_service.get_calorie_goal(user.id)
        summary = state_container.stats_service.get_dashboard(
            user.id, timezone, calorie_goal
        )
        return DashboardOut.from_dashboard(summary)

    @app.get("/profile")
    def get_profile(
        request: Request, user: AuthUser = Depends(current_user)
    ) -> Profile:
        """Return the onboarding profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user.id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
            )
        return profile

    @app.put("/profile")
    def update_profile(
        profile: Profile, request: Request, user: AuthUser = Depends(current_user)
    ) -> Profile:
        """Save the onboarding profile."""
        state_container: AppContainer = request.app.state.container
        return state_container.profile_service.save_profile(user.id, profile)

    @app.get("/goals")
    def get_goals(request: Request, user: AuthUser = Depends(current_user)) -> GoalsOut:
        """Return goals and whether to greet a first-time visitor."""
        state_container: AppContainer = request.app.state.container
        return GoalsOut(
            goals=state_container.goal_service.get_goals(user.id),
            show_welcome=state_container.user_settings_service.consume_welcome(
                user.id
            ),
        )

    @app.put("/goals")
    def update_goals(
        payload: GoalsIn, request: Request, user: AuthUser = Depends(current_user)
    ) -> GoalsOut:
        """Replace the user's goals."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.goal_service.save_goals(user.id, payload.goals)
        return GoalsOut(goals=saved)

    @app.put("/settings/timezone")
    def update_timezone(
        payload: TimezoneIn, request: Request, user: AuthUser = Depends(current_user)
    ) -> dict[str, str]:
        """Set the timezone used for day boundaries."""
        state_container: AppContainer = request.app.state.container
        timezone = payload.timezone.strip()
        if not _is_valid_timezone(timezone):
            raise HTTPException(
                status_code=422,
                detail="Please send a valid timezone like America/Los_Angeles.",
            )
        state_container.user_settings_service.set_timezone(user.id, timezone)
        return {"timezone": timezone}

    return app


def _format_error(state_container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback


def _is_valid_timezone(value: str) -> bool:
    if not value:
        return False
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
