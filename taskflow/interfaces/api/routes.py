"""FastAPI routes for taskflow."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from taskflow import __version__
from taskflow.application import NotificationSink, build_calendar, build_task_view, summarize_tasks
from taskflow.application.task_service import TaskSummary
from taskflow.config import get_config, get_preferences_path
from taskflow.domain.calendar import CalendarView
from taskflow.domain.notification import (
    HistoryEntry,
    Notification,
    NotificationSettings,
    NotifyOptions,
    derive_task_notifications,
)
from taskflow.domain.task import ForestRow, TaskFilter, flatten_forest, ingest_tasks
from taskflow.infrastructure.storage import JsonFileStore

from .schemas import (
    CalendarRequest,
    DeriveRequest,
    ForestRequest,
    NotifyRequest,
    NotifyResponse,
    QueuedNotification,
    SettingsUpdate,
    SinkState,
    TaskListRequest,
)

router = APIRouter(prefix="/api")


def _sink(request: Request) -> NotificationSink:
    return request.app.state.sink


def _now(value: Optional[datetime]) -> datetime:
    return value if value is not None else datetime.now()


def _queued(sink: NotificationSink) -> list[QueuedNotification]:
    return [
        QueuedNotification(id=entry.id, message=entry.message, related_entity_id=entry.related_entity_id)
        for entry in sink.notifications
    ]


# =============================================================================
# Calendar
# =============================================================================


@router.post("/calendar", response_model=CalendarView)
def calendar(body: CalendarRequest):
    """Synthesise calendar events and the next upcoming one."""
    return build_calendar(body.tasks, body.schedules, _now(body.now), body.window_years)


# =============================================================================
# Tasks
# =============================================================================


@router.post("/tasks/forest", response_model=list[ForestRow])
def task_forest(body: ForestRequest):
    """Filter a task list and return its forest as parent-first rows."""
    task_filter = TaskFilter(
        tag=body.tag,
        due=body.due,
        hide_completed=body.hide_completed,
        owner=body.owner,
    )
    return flatten_forest(build_task_view(ingest_tasks(body.tasks), task_filter, _now(body.now)))


@router.post("/tasks/summary", response_model=TaskSummary)
def task_summary(body: TaskListRequest):
    return summarize_tasks(ingest_tasks(body.tasks), _now(body.now))


# =============================================================================
# Notifications
# =============================================================================


@router.post("/notifications/derive", response_model=list[Notification])
def derive_notifications(body: DeriveRequest, request: Request):
    """Derive due-date alerts; optionally deliver them through the sink."""
    config = get_config()
    tasks = ingest_tasks(body.tasks)
    now = _now(body.now)
    derived = derive_task_notifications(tasks, now, config.due_soon_days)
    if body.deliver:
        _sink(request).notify_tasks(tasks, now, config.due_soon_days)
    return derived


@router.post("/notifications", response_model=NotifyResponse)
def send_notification(body: NotifyRequest, request: Request):
    entry_id = _sink(request).notify(
        body.message,
        NotifyOptions(related_entity_id=body.related_entity_id),
    )
    return NotifyResponse(id=entry_id)


@router.get("/notifications", response_model=SinkState)
def notification_state(request: Request):
    """Queued notifications, history and settings in one response."""
    sink = _sink(request)
    return SinkState(notifications=_queued(sink), history=sink.history, settings=sink.settings)


@router.get("/notifications/settings", response_model=NotificationSettings)
def get_settings(request: Request):
    return _sink(request).settings


@router.patch("/notifications/settings", response_model=NotificationSettings)
def update_settings(body: SettingsUpdate, request: Request):
    changes = body.model_dump(exclude_none=True)
    return _sink(request).update_settings(**changes)


@router.get("/notifications/history", response_model=list[HistoryEntry])
def get_history(request: Request):
    return _sink(request).history


@router.delete("/notifications/history", status_code=204)
def clear_history(request: Request):
    _sink(request).clear_history()
    return Response(status_code=204)


# Registered after the fixed /notifications/* paths so they take precedence
@router.delete("/notifications/{entry_id}", status_code=204)
def dismiss_notification(entry_id: str, request: Request):
    # Unknown or already expired ids are not an error
    _sink(request).dismiss(entry_id)
    return Response(status_code=204)


# =============================================================================
# App
# =============================================================================


def create_app(sink: Optional[NotificationSink] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        sink: Notification sink shared by all requests. Defaults to one
            backed by the user's preferences file, without sound or
            native notifications.
    """
    from contextlib import asynccontextmanager

    if sink is None:
        config = get_config()
        sink = NotificationSink(
            JsonFileStore(get_preferences_path()),
            expiry_seconds=config.expiry_seconds,
            history_limit=config.history_limit,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Shutdown: cancel pending expiry timers
        app.state.sink.close()

    app = FastAPI(
        title="Taskflow",
        description="Calendar synthesis, task hierarchy and notification delivery",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.sink = sink

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "Taskflow", "version": __version__}

    return app
