"""
tests/fixtures.py

Shared test data and helper functions for constructing sessions.
All tests should use these builders instead of hardcoding setup.
"""

from datetime import datetime

from tracker.context import SessionContext, build_context
from tracker.scheduler import ManualClock
from tracker.schemas import Location, TrackingState

TEST_SEED: int = 1234
TEST_NOON: datetime = datetime(2024, 6, 15, 12, 0, 0)
TEST_EVENING: datetime = datetime(2024, 6, 15, 20, 0, 0)


def build_session(
    seed: int = TEST_SEED,
    now: datetime = TEST_NOON,
    tracking: bool = True,
) -> SessionContext:
    """Build a SessionContext on a ManualClock with a fixed wall clock."""
    ctx = build_context(seed=seed, clock=ManualClock(), wall_clock=lambda: now)
    ctx.state.is_tracking = tracking
    ctx.state.location = Location(lat=13.0827, lng=80.2707)
    return ctx


def build_state(
    heart_rate: float = 72.0,
    speed: float = 3.0,
    altitude: float = 50.0,
    battery: float = 95.0,
) -> TrackingState:
    """Build a TrackingState with sensible defaults for testing."""
    return TrackingState(
        location=Location(lat=13.0827, lng=80.2707),
        heart_rate=heart_rate,
        battery=battery,
        speed=speed,
        altitude=altitude,
        direction=90.0,
        is_tracking=True,
    )


def build_registration_form(**overrides: str) -> dict[str, str]:
    form = {
        "full_name": "Asha Raman",
        "email": "asha@example.com",
        "phone": "+91 98400 00000",
        "nationality": "Indian",
        "emergency_contact": "+91 98400 11111",
    }
    form.update(overrides)
    return form
