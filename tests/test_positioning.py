"""
tests/test_positioning.py

Unit tests for tracker/services/positioning.py.
The device position source is mocked.
"""

from unittest.mock import MagicMock

from tests.fixtures import build_session
from tracker.errors import PositionUnavailableError
from tracker.schemas import Location, NoticeLevel
from tracker.services.positioning import acquire_location, toggle_tracker


def test_uses_device_fix_when_available() -> None:
    ctx = build_session(tracking=False)
    source = MagicMock()
    source.current_position.return_value = Location(lat=46.5, lng=7.9)

    location = acquire_location(ctx, source)

    assert location == Location(lat=46.5, lng=7.9)
    assert ctx.state.location == location
    assert ctx.state.is_tracking is True
    assert list(ctx.notices) == []


def test_denied_source_falls_back_with_warning() -> None:
    ctx = build_session(tracking=False)
    source = MagicMock()
    source.current_position.side_effect = PositionUnavailableError("denied")

    location = acquire_location(ctx, source)

    assert abs(location.lat - ctx.base_location.lat) <= ctx.location_variance / 2
    assert abs(location.lng - ctx.base_location.lng) <= ctx.location_variance / 2
    assert ctx.state.is_tracking is True
    assert ctx.notices[-1].level is NoticeLevel.WARNING
    assert ctx.notices[-1].message == "Location access denied - using simulated GPS"


def test_missing_source_falls_back_silently() -> None:
    ctx = build_session(tracking=False)

    location = acquire_location(ctx)

    assert ctx.state.location == location
    assert ctx.state.is_tracking is True
    assert list(ctx.notices) == []


def test_enabling_iot_tracker_starts_tracking() -> None:
    ctx = build_session(tracking=False)

    assert toggle_tracker(ctx, True) is True

    assert ctx.state.is_tracking is True
    assert ctx.notices[-1].message == "IoT tracker enabled - Enhanced monitoring active"


def test_disabling_iot_tracker_keeps_phone_gps_tracking() -> None:
    ctx = build_session()
    toggle_tracker(ctx, True)

    assert toggle_tracker(ctx, False) is False

    assert ctx.state.is_tracking is True
    assert ctx.notices[-1].level is NoticeLevel.WARNING
    assert ctx.notices[-1].message == "Using smartphone GPS only"
