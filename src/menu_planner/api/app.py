"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import FastAPI, HTTPException, Request, status

from menu_planner.api.models import (
    LogEntryPayload,
    LogItemsRequest,
    LogSelectionRequest,
    MenuParseRequest,
    PlanRequest,
    ProfilePayload,
    UserPlanRequest,
)
from menu_planner.app_logging import configure_logging
from menu_planner.containers import AppContainer
from menu_planner.domain.plans import DayPlan
from menu_planner.services.planner import generate_day_plans
from menu_planner.services.targets import compute_targets

INVALID_PROFILE = "Invalid profile: age, height and weight must be positive numbers."


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/targets")
    async def targets(payload: ProfilePayload) -> dict[str, object]:
        """Compute targets without persisting them."""
        result = compute_targets(payload.to_domain())
        if result is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=INVALID_PROFILE,
            )
        return result.to_dict()

    @app.post("/menu/parse")
    async def parse_menu(
        payload: MenuParseRequest, request: Request
    ) -> dict[str, object]:
        """Parse menu text into items with default preferences."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.menu_parse_service.parse(
            payload.text, api_key=payload.api_key
        )
        return {
            "items": [item.to_dict() for item in result.items],
            "source": result.source,
            "advisory": result.advisory,
            "preferences": {
                item_id: preference.value
                for item_id, preference in result.preferences.items()
            },
        }

    @app.post("/plans")
    async def plans(payload: PlanRequest) -> dict[str, object]:
        """Generate three day plans for an explicit remaining budget."""
        day_plans = generate_day_plans(
            [item.to_domain() for item in payload.items],
            payload.preferences,
            payload.remaining.to_domain(),
        )
        return _serialize_plans(day_plans)

    @app.put("/users/{user_id}/profile")
    async def save_profile(
        user_id: UUID, payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Save a profile together with its computed targets."""
        state_container: AppContainer = request.app.state.container
        profile = payload.to_domain()
        result = state_container.profile_service.save_profile(user_id, profile)
        if result is None:
            logger.info("Rejected invalid profile for user %s", user_id)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=INVALID_PROFILE,
            )
        return {"profile": profile.to_dict(), "targets": result.to_dict()}

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the stored profile and targets."""
        state_container: AppContainer = request.app.state.container
        stored = state_container.profile_service.load_profile(user_id)
        if stored is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {
            "profile": stored.profile.to_dict(),
            "targets": stored.targets.to_dict() if stored.targets else None,
        }

    @app.get("/users/{user_id}/log")
    async def get_log(
        user_id: UUID, request: Request, timezone: str | None = None
    ) -> dict[str, object]:
        """Return the log history and today's consumed totals."""
        state_container: AppContainer = request.app.state.container
        service = state_container.food_log_service
        timezone_name = timezone or state_container.settings.default_timezone
        try:
            ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unknown timezone: {timezone_name}",
            ) from exc
        return {
            "entries": [entry.to_dict() for entry in service.history(user_id)],
            "consumedToday": service.consumed_today(user_id, timezone_name).to_dict(),
        }

    @app.post("/users/{user_id}/log")
    async def log_items(
        user_id: UUID, payload: LogItemsRequest, request: Request
    ) -> dict[str, object]:
        """Append items to the log."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.food_log_service.log_items(
            user_id,
            [item.to_domain() for item in payload.items],
            logged_at=payload.logged_at(),
        )
        return {"entries": [entry.to_dict() for entry in entries]}

    @app.post("/users/{user_id}/log/selection")
    async def log_selection(
        user_id: UUID, payload: LogSelectionRequest, request: Request
    ) -> dict[str, object]:
        """Log the meals chosen per slot across generated plans."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.food_log_service.log_selection(
            user_id,
            payload.selection(),
            [plan.to_domain() for plan in payload.plans],
            logged_at=payload.logged_at(),
        )
        return {"entries": [entry.to_dict() for entry in entries]}

    @app.post("/users/{user_id}/log/remove")
    async def remove_log_entry(
        user_id: UUID, payload: LogEntryPayload, request: Request
    ) -> dict[str, str]:
        """Remove a log entry; removing a missing entry succeeds."""
        state_container: AppContainer = request.app.state.container
        state_container.food_log_service.remove_entry(user_id, payload.to_domain())
        return {"status": "ok"}

    @app.post("/users/{user_id}/plans")
    async def user_plans(
        user_id: UUID, payload: UserPlanRequest, request: Request
    ) -> dict[str, object]:
        """Generate plans from stored targets minus today's log."""
        state_container: AppContainer = request.app.state.container
        day_plans = state_container.planning_service.plan_for_user(
            user_id,
            [item.to_domain() for item in payload.items],
            payload.preferences,
            payload.timezone or state_container.settings.default_timezone,
        )
        if day_plans is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No valid targets stored for user.",
            )
        return _serialize_plans(day_plans)

    return app


def _serialize_plans(day_plans: list[DayPlan]) -> dict[str, object]:
    return {"plans": [plan.to_dict() for plan in day_plans]}
