"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from fuel_hub.api.models import (
    DailyLogPayload,
    GroceryPlanRequest,
    HistoryEntryResponse,
    MealAnalysisRequest,
    MealRefineRequest,
    ProfilePatch,
    ProfilePayload,
    QuestionRequest,
    ReadinessResponse,
    RecipeRequest,
    ResearchRequest,
    SavedMealResponse,
    SaveMealRequest,
    TargetsResponse,
    TextResponse,
    WorkoutRequest,
)
from fuel_hub.app_logging import configure_logging
from fuel_hub.containers import AppContainer
from fuel_hub.domain.coach import MealAnalysis, ResearchResult, WorkoutPlan
from fuel_hub.domain.profile import SPORTS_CATALOG, AthleteProfile
from fuel_hub.domain.readiness import DailyLog
from fuel_hub.services.coach import CoachError
from fuel_hub.services.parsers import WorkoutParseError
from fuel_hub.services.readiness import readiness_band, score_readiness
from fuel_hub.services.targets import calculate_targets

_NULLABLE_PROFILE_FIELDS = {"likes", "dislikes"}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(CoachError)
    async def coach_error_handler(request: Request, exc: CoachError) -> JSONResponse:
        logger.error("AI coach request failed: %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "detail": _format_coach_error(
                    container, exc, "The AI coach hit an unexpected hurdle."
                )
            },
        )

    @app.exception_handler(WorkoutParseError)
    async def workout_error_handler(
        request: Request, exc: WorkoutParseError
    ) -> JSONResponse:
        logger.warning("Unparsable workout from AI coach: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "detail": _format_coach_error(
                    container,
                    exc,
                    "The generated workout was not in the expected format. "
                    "Please try again.",
                )
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the saved profile or first-use defaults."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.profile_service.get())

    @app.put("/profile")
    async def replace_profile(
        payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Overwrite the saved profile."""
        state_container: AppContainer = request.app.state.container
        profile = AthleteProfile(**payload.model_dump())
        state_container.profile_service.save(profile)
        return asdict(profile)

    @app.patch("/profile")
    async def update_profile(
        payload: ProfilePatch, request: Request
    ) -> dict[str, object]:
        """Merge a partial update into the saved profile."""
        state_container: AppContainer = request.app.state.container
        changes = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_PROFILE_FIELDS
        }
        return asdict(state_container.profile_service.update(changes))

    @app.get("/profile/targets")
    async def get_targets(request: Request) -> TargetsResponse:
        """Return targets computed from the saved profile."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.profile_service.targets()
        return TargetsResponse.model_validate(asdict(targets))

    @app.get("/profile/sports")
    async def list_sports() -> dict[str, list[str]]:
        """Return supported sports and their positions."""
        return SPORTS_CATALOG

    @app.post("/readiness/score")
    async def score_day(
        payload: DailyLogPayload, request: Request
    ) -> ReadinessResponse:
        """Score a check-in against the saved profile's targets."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.profile_service.targets()
        breakdown = score_readiness(DailyLog(**payload.model_dump()), targets)
        return ReadinessResponse(
            **asdict(breakdown),
            band=readiness_band(breakdown.total),
            targets=TargetsResponse.model_validate(asdict(targets)),
        )

    @app.post("/readiness/commit")
    async def commit_day(
        payload: DailyLogPayload, request: Request
    ) -> HistoryEntryResponse:
        """Score today's check-in and upsert it into history."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get()
        targets = calculate_targets(profile)
        daily_log = DailyLog(**payload.model_dump())
        score = score_readiness(daily_log, targets).total
        entry = state_container.history_service.commit(
            profile, targets, daily_log, score
        )
        return HistoryEntryResponse.model_validate(asdict(entry))

    @app.get("/readiness/history")
    async def get_history(request: Request) -> list[HistoryEntryResponse]:
        """Return the stored readiness history, oldest first."""
        state_container: AppContainer = request.app.state.container
        return [
            HistoryEntryResponse.model_validate(asdict(entry))
            for entry in state_container.history_service.list_history()
        ]

    @app.post("/coach/ask")
    async def ask_coach(payload: QuestionRequest, request: Request) -> TextResponse:
        """Answer a free-form coaching question."""
        state_container: AppContainer = request.app.state.container
        text = await state_container.coach_service.ask(payload.question)
        return TextResponse(text=text)

    @app.post("/kitchen/analyze")
    async def analyze_meal(
        payload: MealAnalysisRequest, request: Request
    ) -> MealAnalysis:
        """Analyze a meal photo or description."""
        state_container: AppContainer = request.app.state.container
        if not payload.description.strip() and not payload.image_base64:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Provide a meal description or a photo.",
            )
        goal = payload.goal or state_container.profile_service.get().goal
        coach = state_container.coach_service
        if payload.image_base64:
            image_bytes = _decode_image(payload.image_base64)
            return await coach.analyze_meal_image(
                image_bytes, payload.description, goal
            )
        return await coach.analyze_meal_text(payload.description, goal)

    @app.post("/kitchen/refine")
    async def refine_meal(payload: MealRefineRequest, request: Request) -> MealAnalysis:
        """Refine a previous meal analysis with follow-up details."""
        state_container: AppContainer = request.app.state.container
        goal = payload.goal or state_container.profile_service.get().goal
        return await state_container.coach_service.refine_analysis(
            payload.previous_analysis, payload.follow_up, goal
        )

    @app.post("/kitchen/recipe")
    async def build_recipe(payload: RecipeRequest, request: Request) -> TextResponse:
        """Suggest a recipe from available ingredients."""
        state_container: AppContainer = request.app.state.container
        goal = payload.goal or state_container.profile_service.get().goal
        text = await state_container.coach_service.build_recipe(
            payload.ingredients, goal
        )
        return TextResponse(text=text)

    @app.get("/kitchen/meals")
    async def list_meals(
        request: Request, limit: int = Query(default=4, ge=1)
    ) -> list[SavedMealResponse]:
        """Return the most recently saved meals."""
        state_container: AppContainer = request.app.state.container
        return [
            SavedMealResponse.model_validate(asdict(meal))
            for meal in state_container.meal_journal_service.recent(limit)
        ]

    @app.post("/kitchen/meals", status_code=status.HTTP_201_CREATED)
    async def save_meal(
        payload: SaveMealRequest, request: Request
    ) -> SavedMealResponse:
        """Save a meal analysis to the journal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_journal_service.save_meal(
            payload.analysis, payload.macros
        )
        return SavedMealResponse.model_validate(asdict(meal))

    @app.post("/groceries/plan")
    async def plan_groceries(
        payload: GroceryPlanRequest, request: Request
    ) -> ResearchResult:
        """Build a weekly grocery plan for the athlete."""
        state_container: AppContainer = request.app.state.container
        return await state_container.coach_service.generate_grocery_plan(
            state_container.profile_service.get(),
            budget=payload.budget,
            location=payload.location,
            favorite_foods=payload.favorite_foods,
            preferences=payload.preferences,
        )

    @app.post("/training/workout")
    async def generate_workout(
        payload: WorkoutRequest, request: Request
    ) -> WorkoutPlan:
        """Generate a structured training split."""
        state_container: AppContainer = request.app.state.container
        return await state_container.coach_service.generate_workout(
            state_container.profile_service.get(), payload.days, payload.focus
        )

    @app.post("/research")
    async def research(payload: ResearchRequest, request: Request) -> ResearchResult:
        """Research a performance topic with citations."""
        state_container: AppContainer = request.app.state.container
        return await state_container.coach_service.research(payload.query)

    return app


def _decode_image(raw: str) -> bytes:
    """Decode a base64 image, accepting an optional data URL prefix."""
    _, _, encoded = raw.rpartition(",")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image must be base64 encoded.",
        ) from exc


def _format_coach_error(
    state_container: AppContainer, exc: Exception, fallback: str
) -> str:
    """Return a user-facing coach error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
