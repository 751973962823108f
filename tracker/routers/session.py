"""
tracker/routers/session.py

HTTP endpoints over the running tracking session.
Reads status and risk, drives the SOS flow, toggles auto-SOS and runs
onboarding.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Request

from tracker.context import SessionContext
from tracker.errors import RegistrationError
from tracker.schemas import (
    AutoSosRequest,
    CancelEmergencyRequest,
    Notice,
    RiskAssessment,
    ScanProgress,
    SessionStatus,
    TrackerRequest,
    UserProfile,
)
from tracker.services.emergency import (
    cancel_emergency,
    contact_emergency_services,
    demo_emergency_scenario,
    reset_demo,
    trigger_emergency,
)
from tracker.services.onboarding import register_user, run_document_scan
from tracker.services.positioning import toggle_tracker
from tracker.services.risk import assess_risk
from tracker.services.telemetry import activity_type, refresh_status

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_session(request: Request) -> SessionContext:
    return request.app.state.session


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/status", response_model=SessionStatus)
async def read_status(ctx: SessionContext = Depends(get_session)) -> SessionStatus:
    """Current tracking snapshot. Each read drains the battery by one step."""
    state = refresh_status(ctx)
    return SessionStatus(
        tracking=state,
        emergency_active=ctx.emergency_active,
        auto_sos_enabled=ctx.auto_sos_enabled,
        iot_tracker_enabled=ctx.iot_tracker_enabled,
        activity=activity_type(state.speed),
        risk=ctx.last_assessment,
        emergency=ctx.emergency,
        broker_status=dict(ctx.broker_status),
    )


@router.get("/risk", response_model=RiskAssessment)
async def read_risk(ctx: SessionContext = Depends(get_session)) -> RiskAssessment:
    return assess_risk(ctx)


@router.post("/sos")
async def raise_sos(ctx: SessionContext = Depends(get_session)) -> dict[str, bool]:
    triggered = trigger_emergency(ctx)
    return {"triggered": triggered}


@router.post("/sos/cancel")
async def cancel_sos(
    body: CancelEmergencyRequest,
    ctx: SessionContext = Depends(get_session),
) -> dict[str, bool]:
    cancelled = cancel_emergency(ctx, confirmed=body.confirmed)
    return {"cancelled": cancelled}


@router.post("/sos/contact")
async def contact_services(
    ctx: SessionContext = Depends(get_session),
) -> dict[str, str]:
    contact_emergency_services(ctx)
    return {"status": "connecting"}


@router.put("/settings/auto-sos")
async def set_auto_sos(
    body: AutoSosRequest,
    ctx: SessionContext = Depends(get_session),
) -> dict[str, bool]:
    ctx.auto_sos_enabled = body.enabled
    logger.info("auto_sos_toggled", enabled=body.enabled)
    return {"auto_sos_enabled": ctx.auto_sos_enabled}


@router.put("/settings/tracker")
async def set_tracker(
    body: TrackerRequest,
    ctx: SessionContext = Depends(get_session),
) -> dict[str, bool]:
    enabled = toggle_tracker(ctx, body.enabled)
    return {"iot_tracker_enabled": enabled, "is_tracking": ctx.state.is_tracking}


@router.get("/notices", response_model=list[Notice])
async def list_notices(ctx: SessionContext = Depends(get_session)) -> list[Notice]:
    return list(ctx.notices)


@router.post("/demo/emergency")
async def demo_emergency(ctx: SessionContext = Depends(get_session)) -> dict[str, str]:
    demo_emergency_scenario(ctx)
    return {"status": "scheduled"}


@router.post("/demo/reset")
async def demo_reset(ctx: SessionContext = Depends(get_session)) -> dict[str, str]:
    reset_demo(ctx)
    return {"status": "reset"}


@router.post("/onboarding/register", response_model=UserProfile)
async def register(
    form: dict[str, Any] = Body(...),
    ctx: SessionContext = Depends(get_session),
) -> UserProfile:
    try:
        return register_user(ctx, form)
    except RegistrationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/onboarding/scan", response_model=ScanProgress)
async def start_scan(ctx: SessionContext = Depends(get_session)) -> ScanProgress:
    try:
        run_document_scan(ctx)
    except RegistrationError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ctx.scan
