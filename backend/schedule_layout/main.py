from __future__ import annotations

from datetime import date
from functools import lru_cache
import logging
import uuid

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .errors import DataSourceUnavailable, ScheduleError
from .filters import ViewState, build_view_state
from .logging_config import setup_logging
from .models import (
    ErrorResponse,
    EventStatsResponse,
    HealthResponse,
    LayoutRequest,
    MetaResponse,
    MonthLayoutResponse,
    WeekLayoutResponse,
)
from .service import CalendarService

logger = logging.getLogger(__name__)


@lru_cache
def get_service() -> CalendarService:
    settings = get_settings()
    return CalendarService(settings=settings)


def _view_from_request(payload: LayoutRequest) -> ViewState:
    return build_view_state(
        window_start=payload.view.window_start,
        window_end=payload.view.window_end,
        resource_ids=payload.view.selected_resource_ids,
        statuses=payload.view.statuses,
    )


def create_app() -> FastAPI:
    settings: Settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Sales Calendar Layout API",
        version="1.0.0",
        description="Week and month calendar layouts for sales representative appointments.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(DataSourceUnavailable)
    async def data_source_exception_handler(request: Request, exc: DataSourceUnavailable):
        logger.error("Event store unavailable: %s", exc)
        payload = ErrorResponse(detail=str(exc), request_id=getattr(request.state, "request_id", None))
        return JSONResponse(status_code=503, content=payload.model_dump())

    @app.exception_handler(ScheduleError)
    async def schedule_error_handler(request: Request, exc: ScheduleError):
        payload = ErrorResponse(detail=str(exc), request_id=getattr(request.state, "request_id", None))
        return JSONResponse(status_code=422, content=payload.model_dump())

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", exc_info=exc)
        payload = ErrorResponse(
            detail="Internal server error.",
            request_id=getattr(request.state, "request_id", None),
        )
        return JSONResponse(status_code=500, content=payload.model_dump())

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Sales Calendar Layout API", "docs": "/docs"}

    @app.get("/api/v1/health", response_model=HealthResponse)
    def health(service: CalendarService = Depends(get_service)) -> HealthResponse:
        return service.health()

    @app.get("/api/v1/meta", response_model=MetaResponse)
    def meta(service: CalendarService = Depends(get_service)) -> MetaResponse:
        return service.meta()

    @app.get("/api/v1/events/stats", response_model=EventStatsResponse)
    def event_stats(service: CalendarService = Depends(get_service)) -> EventStatsResponse:
        return service.stats()

    @app.get("/api/v1/calendar/week", response_model=WeekLayoutResponse)
    def calendar_week(
        anchor_date: date = Query(),
        resource: list[str] | None = Query(default=None),
        status: list[str] | None = Query(default=None),
        service: CalendarService = Depends(get_service),
    ) -> WeekLayoutResponse:
        return service.get_week_layout(anchor_date=anchor_date, resource_ids=resource, statuses=status)

    @app.get("/api/v1/calendar/month", response_model=MonthLayoutResponse)
    def calendar_month(
        anchor_date: date = Query(),
        resource: list[str] | None = Query(default=None),
        status: list[str] | None = Query(default=None),
        service: CalendarService = Depends(get_service),
    ) -> MonthLayoutResponse:
        return service.get_month_layout(anchor_date=anchor_date, resource_ids=resource, statuses=status)

    @app.post("/api/v1/layout/week", response_model=WeekLayoutResponse)
    def layout_week(payload: LayoutRequest, service: CalendarService = Depends(get_service)) -> WeekLayoutResponse:
        records = [event.model_dump() for event in payload.events]
        return service.layout_week(records, _view_from_request(payload))

    @app.post("/api/v1/layout/month", response_model=MonthLayoutResponse)
    def layout_month(payload: LayoutRequest, service: CalendarService = Depends(get_service)) -> MonthLayoutResponse:
        records = [event.model_dump() for event in payload.events]
        return service.layout_month(records, _view_from_request(payload))

    return app


app = create_app()
