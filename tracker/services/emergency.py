"""
tracker/services/emergency.py

Emergency SOS state machine and the simulated rescue response.
- trigger_emergency: Normal -> Active (no-op while Active)
- cancel_emergency: Active -> Normal, only on explicit confirmation
- demo_emergency_scenario / reset_demo: presentation helpers
"""

import structlog

from tracker.constants import (
    DEMO_PANIC_HEART_RATE,
    DEMO_RESET_ALTITUDE,
    DEMO_RESET_DIRECTION,
    DEMO_RESET_SPEED,
    DEMO_TRAIL_LAT,
    DEMO_TRAIL_LNG,
    DEMO_TRIGGER_DELAY_S,
    EVIDENCE_CAPTURE_DELAY_S,
    FUNDS_RESERVED_DELAY_S,
    HEART_RATE_BASELINE,
    HEART_RATE_EMERGENCY_MAX,
    HEART_RATE_EMERGENCY_MIN,
    RESCUE_ETA,
    RESCUE_ETA_DELAY_S,
    RESPONSE_TEAM,
    SERVICES_CONTACT_DELAY_S,
    TEAM_DISPATCH_DELAY_S,
)
from tracker.context import SessionContext
from tracker.scheduler import Job
from tracker.schemas import EmergencyResponse, NoticeLevel, TrackingState
from tracker.services.notification import notify
from tracker.services.telemetry import random_location

logger = structlog.get_logger(__name__)


def trigger_emergency(ctx: SessionContext) -> bool:
    """
    Activate the emergency regime.

    Heart rate jumps into the panic band, speed drops to zero and normal
    drift stops until the emergency is cancelled.
    Returns False (and changes nothing) if an emergency is already active.
    """
    if ctx.emergency_active:
        logger.info("emergency_already_active")
        return False

    ctx.emergency_active = True
    state = ctx.state
    state.heart_rate = float(
        ctx.rng.uniform(HEART_RATE_EMERGENCY_MIN, HEART_RATE_EMERGENCY_MAX)
    )
    state.speed = 0.0

    ctx.emergency = EmergencyResponse(
        activated_at=ctx.wall_clock(),
        location=state.location.model_copy(),
    )
    logger.warning(
        "emergency_triggered",
        lat=state.location.lat,
        lng=state.location.lng,
        heart_rate=round(state.heart_rate, 1),
    )
    notify(ctx, "EMERGENCY SOS ACTIVATED!", NoticeLevel.ERROR)
    _schedule_response(ctx)
    return True


def _schedule_response(ctx: SessionContext) -> None:
    """Queue the simulated dispatch timeline for the active emergency."""
    scheduler = ctx.scheduler

    def dispatch_team() -> None:
        if ctx.emergency is not None:
            ctx.emergency.response_team = RESPONSE_TEAM
            logger.info("rescue_team_dispatched", team=RESPONSE_TEAM)

    def set_eta() -> None:
        if ctx.emergency is not None:
            ctx.emergency.rescue_eta = RESCUE_ETA
            logger.info("rescue_eta_updated", eta=RESCUE_ETA)

    ctx.emergency_jobs = [
        scheduler.call_later(
            EVIDENCE_CAPTURE_DELAY_S,
            lambda: notify(
                ctx, "Evidence captured and secured on blockchain", NoticeLevel.WARNING
            ),
            name="evidence_capture",
        ),
        scheduler.call_later(
            FUNDS_RESERVED_DELAY_S,
            lambda: notify(ctx, "Emergency funds reserved via smart contract"),
            name="funds_reserved",
        ),
        scheduler.call_later(TEAM_DISPATCH_DELAY_S, dispatch_team),
        scheduler.call_later(RESCUE_ETA_DELAY_S, set_eta),
    ]


def _cancel_response(ctx: SessionContext) -> None:
    for job in ctx.emergency_jobs:
        job.cancel()
    ctx.emergency_jobs = []


def track_trigger(ctx: SessionContext, job: Job) -> Job:
    """Remember a delayed SOS trigger so reset_demo can drop it."""
    ctx.pending_triggers = [j for j in ctx.pending_triggers if not j.cancelled]
    ctx.pending_triggers.append(job)
    return job


def cancel_emergency(ctx: SessionContext, confirmed: bool) -> bool:
    """
    Return to the normal regime after explicit user confirmation.

    Heart rate is reset to HEART_RATE_BASELINE. Returns True if the
    emergency was cancelled.
    """
    if not ctx.emergency_active:
        return False
    if not confirmed:
        logger.info("emergency_cancel_not_confirmed")
        return False

    ctx.emergency_active = False
    ctx.state.heart_rate = HEART_RATE_BASELINE
    _cancel_response(ctx)
    ctx.emergency = None
    logger.info("emergency_cancelled")
    notify(ctx, "Emergency alert cancelled")
    return True


def contact_emergency_services(ctx: SessionContext) -> None:
    """Simulate a call to emergency services."""
    notify(ctx, "Connecting to emergency services...")
    ctx.scheduler.call_later(
        SERVICES_CONTACT_DELAY_S,
        lambda: notify(ctx, "Emergency services contacted successfully!"),
        name="services_contacted",
    )


def demo_emergency_scenario(ctx: SessionContext) -> None:
    """Stage a stopped, panicking hiker on a hill trail, then raise SOS."""
    state = ctx.state
    state.location.lat = DEMO_TRAIL_LAT
    state.location.lng = DEMO_TRAIL_LNG
    state.heart_rate = DEMO_PANIC_HEART_RATE
    state.speed = 0.0

    notify(ctx, "DEMO: Simulating emergency scenario...", NoticeLevel.WARNING)
    track_trigger(
        ctx,
        ctx.scheduler.call_later(
            DEMO_TRIGGER_DELAY_S, lambda: trigger_emergency(ctx), name="demo_trigger"
        ),
    )


def reset_demo(ctx: SessionContext) -> None:
    """Clear any emergency, drop pending SOS triggers and restore a fresh state."""
    _cancel_response(ctx)
    for job in ctx.pending_triggers:
        job.cancel()
    ctx.pending_triggers = []
    ctx.emergency_active = False
    ctx.emergency = None
    ctx.state = TrackingState(
        location=random_location(ctx.rng, ctx.base_location, ctx.location_variance),
        heart_rate=HEART_RATE_BASELINE,
        is_tracking=True,
        speed=DEMO_RESET_SPEED,
        altitude=DEMO_RESET_ALTITUDE,
        direction=DEMO_RESET_DIRECTION,
    )
    logger.info("demo_reset")
    notify(ctx, "Demo reset complete")
