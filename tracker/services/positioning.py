"""
tracker/services/positioning.py

Location acquisition with synthetic fallback.
A device position source is consulted when one is available; if it is
absent or denies access, simulated coordinates around the configured base
location are used instead.
"""

from typing import Optional, Protocol

import structlog

from tracker.context import SessionContext
from tracker.errors import PositionUnavailableError
from tracker.schemas import Location, NoticeLevel
from tracker.services.notification import notify
from tracker.services.telemetry import random_location

logger = structlog.get_logger(__name__)


class PositionSource(Protocol):
    def current_position(self) -> Location:
        """Return the current fix or raise PositionUnavailableError."""
        ...


def acquire_location(
    ctx: SessionContext,
    source: Optional[PositionSource] = None,
) -> Location:
    """Set the session location from source, falling back to simulated GPS."""
    location: Optional[Location] = None

    if source is not None:
        try:
            location = source.current_position()
            logger.info("position_acquired", lat=location.lat, lng=location.lng)
        except PositionUnavailableError as exc:
            logger.warning("position_denied", error=str(exc), fallback="simulated")
            notify(
                ctx,
                "Location access denied - using simulated GPS",
                NoticeLevel.WARNING,
            )
    else:
        logger.info("position_source_absent", fallback="simulated")

    if location is None:
        location = random_location(ctx.rng, ctx.base_location, ctx.location_variance)

    ctx.state.location = location
    ctx.state.is_tracking = True
    return location


def toggle_tracker(ctx: SessionContext, enabled: bool) -> bool:
    """
    Switch the external IoT tracker on or off.

    Enabling turns tracking on. Disabling falls back to phone GPS and leaves
    tracking running.
    """
    ctx.iot_tracker_enabled = enabled
    if enabled:
        ctx.state.is_tracking = True
        notify(ctx, "IoT tracker enabled - Enhanced monitoring active")
    else:
        notify(ctx, "Using smartphone GPS only", NoticeLevel.WARNING)
    logger.info("iot_tracker_toggled", enabled=enabled)
    return ctx.iot_tracker_enabled
