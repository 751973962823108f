"""
tracker/session.py

Wires the periodic simulation jobs onto a session's scheduler.
"""

from typing import Optional

import structlog

from config import settings
from tracker.context import SessionContext
from tracker.services.positioning import PositionSource, acquire_location
from tracker.services.risk import assess_risk
from tracker.services.streaming import broker_status_tick, stream_tick
from tracker.services.telemetry import drift_tick, heart_rate_tick

logger = structlog.get_logger(__name__)


def start_session(
    ctx: SessionContext,
    source: Optional[PositionSource] = None,
) -> None:
    """Acquire an initial location and register every simulation timer."""
    acquire_location(ctx, source)

    scheduler = ctx.scheduler
    scheduler.every(settings.drift_period_s, lambda: drift_tick(ctx), name="drift")
    scheduler.every(
        settings.heart_rate_period_s, lambda: heart_rate_tick(ctx), name="heart_rate"
    )
    scheduler.every(settings.risk_period_s, lambda: assess_risk(ctx), name="risk")
    scheduler.every(settings.stream_period_s, lambda: stream_tick(ctx), name="stream")
    scheduler.every(
        settings.broker_period_s, lambda: broker_status_tick(ctx), name="broker"
    )
    logger.info(
        "session_started",
        lat=ctx.state.location.lat,
        lng=ctx.state.location.lng,
        auto_sos_enabled=ctx.auto_sos_enabled,
    )


def stop_session(ctx: SessionContext) -> None:
    """Clear every scheduled job."""
    ctx.scheduler.shutdown()
    ctx.state.is_tracking = False
    logger.info("session_stopped")
