"""
tracker/services/telemetry.py

Synthetic telemetry generation.
- drift_tick: location jitter plus fresh speed / altitude / heading
- heart_rate_tick: normal-range heart rate redraw, then a status refresh
- refresh_status: battery drain, floored at BATTERY_FLOOR

Uses constants from tracker/constants.py; no magic numbers allowed.
"""

import numpy as np
import structlog

from tracker.constants import (
    ALTITUDE_NORMAL_MAX,
    ALTITUDE_NORMAL_MIN,
    BATTERY_DRAIN_STEP,
    BATTERY_FLOOR,
    DIRECTION_MAX,
    HEART_RATE_NORMAL_MAX,
    HEART_RATE_NORMAL_MIN,
    LOCATION_DRIFT,
    RUNNING_SPEED_MIN,
    SPEED_NORMAL_MAX,
    SPEED_NORMAL_MIN,
    STATIONARY_SPEED,
    WALKING_SPEED_MAX,
)
from tracker.context import SessionContext
from tracker.schemas import ActivityType, Location, TrackingState

logger = structlog.get_logger(__name__)


def random_location(
    rng: np.random.Generator, base: Location, variance: float
) -> Location:
    """Draw a point uniformly within variance/2 degrees of base."""
    return Location(
        lat=base.lat + (float(rng.random()) - 0.5) * variance,
        lng=base.lng + (float(rng.random()) - 0.5) * variance,
    )


def drift_tick(ctx: SessionContext) -> bool:
    """
    Apply one movement step while tracking outside an emergency.

    Returns True if the state was changed.
    """
    state = ctx.state
    if not state.is_tracking or ctx.emergency_active:
        return False

    rng = ctx.rng
    state.location.lat += (float(rng.random()) - 0.5) * LOCATION_DRIFT
    state.location.lng += (float(rng.random()) - 0.5) * LOCATION_DRIFT
    state.speed = float(rng.uniform(SPEED_NORMAL_MIN, SPEED_NORMAL_MAX))
    state.altitude = float(rng.uniform(ALTITUDE_NORMAL_MIN, ALTITUDE_NORMAL_MAX))
    state.direction = float(rng.uniform(0.0, DIRECTION_MAX))
    return True


def heart_rate_tick(ctx: SessionContext) -> None:
    """Redraw heart rate in the normal band unless an emergency holds it."""
    if not ctx.emergency_active:
        ctx.state.heart_rate = float(
            ctx.rng.uniform(HEART_RATE_NORMAL_MIN, HEART_RATE_NORMAL_MAX)
        )
    refresh_status(ctx)


def refresh_status(ctx: SessionContext) -> TrackingState:
    """Drain the battery by one step and return the current state."""
    state = ctx.state
    if state.battery > BATTERY_FLOOR:
        state.battery = max(
            BATTERY_FLOOR, round(state.battery - BATTERY_DRAIN_STEP, 2)
        )
        if state.battery == BATTERY_FLOOR:
            logger.warning("battery_floor_reached", battery=state.battery)
    return state


def activity_type(speed: float) -> ActivityType:
    """Classify movement from speed in km/h."""
    if speed >= RUNNING_SPEED_MIN:
        return ActivityType.RUNNING
    if speed >= WALKING_SPEED_MAX:
        return ActivityType.HIKING
    if speed > STATIONARY_SPEED:
        return ActivityType.WALKING
    return ActivityType.STATIONARY
