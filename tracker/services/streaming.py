"""
tracker/services/streaming.py

Simulated telemetry uplink.
- stream_tick: hands a TelemetryRecord to the log sink once per period
- broker_status_tick: occasional MQTT reconnect flap with scheduled recovery

There is no real broker; the log is the ingestion sink.
"""

from typing import Optional

import structlog

from tracker.constants import BROKER_RECOVERY_DELAY_S
from tracker.context import SessionContext
from tracker.schemas import TelemetryRecord

logger = structlog.get_logger(__name__)


def build_record(ctx: SessionContext) -> TelemetryRecord:
    return TelemetryRecord(
        location=ctx.state.location.model_copy(),
        heart_rate=ctx.state.heart_rate,
        timestamp=ctx.wall_clock(),
    )


def stream_tick(ctx: SessionContext) -> Optional[TelemetryRecord]:
    """Stream the current location and heart rate while tracking."""
    if not ctx.state.is_tracking:
        return None

    record = build_record(ctx)
    logger.info(
        "telemetry_streamed",
        lat=record.location.lat,
        lng=record.location.lng,
        heart_rate=round(record.heart_rate, 1),
        timestamp=record.timestamp.isoformat(),
    )
    return record


def broker_status_tick(ctx: SessionContext) -> bool:
    """
    Randomly drop the MQTT link into a reconnecting state.

    Returns True if a flap started on this tick.
    """
    if float(ctx.rng.random()) >= ctx.broker_flap_probability:
        return False

    ctx.broker_status["mqtt"] = "reconnecting"
    logger.warning("broker_reconnecting", broker="mqtt")

    def recover() -> None:
        ctx.broker_status["mqtt"] = "connected"
        logger.info("broker_connected", broker="mqtt")

    ctx.scheduler.call_later(BROKER_RECOVERY_DELAY_S, recover, name="mqtt_recover")
    return True
