"""
tracker/services/risk.py

Rule-based risk classification and the auto-SOS gate.
- evaluate_risk_factors: three independent predicates, equal weight
- classify: factor count -> RiskLevel
- assess_risk: one evaluation cycle against the session state

Uses constants from tracker/constants.py; no magic numbers allowed.
"""

from typing import Optional

import structlog

from tracker.constants import (
    DANGER_FACTOR_COUNT,
    ELEVATED_HEART_RATE,
    HIGH_ALTITUDE_M,
    NIGHTFALL_END_HOUR,
    NIGHTFALL_START_HOUR,
    STATIONARY_SPEED,
)
from tracker.context import SessionContext
from tracker.scheduler import Job
from tracker.schemas import (
    RISK_LABELS,
    NoticeLevel,
    RiskAssessment,
    RiskFactor,
    RiskLevel,
)
from tracker.services.emergency import track_trigger, trigger_emergency
from tracker.services.notification import notify

logger = structlog.get_logger(__name__)


def evaluate_risk_factors(
    hour: int,
    altitude: float,
    heart_rate: float,
    speed: float,
) -> list[RiskFactor]:
    """Return the risk factors that hold for the given readings."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0-23, got {hour}")

    factors: list[RiskFactor] = []

    # Factor 1: dusk or night
    if hour >= NIGHTFALL_START_HOUR or hour <= NIGHTFALL_END_HOUR:
        factors.append(RiskFactor.NIGHTFALL)

    # Factor 2: altitude above the high-altitude line
    if altitude > HIGH_ALTITUDE_M:
        factors.append(RiskFactor.HIGH_ALTITUDE)

    # Factor 3: elevated heart rate with no movement
    if heart_rate > ELEVATED_HEART_RATE and speed < STATIONARY_SPEED:
        factors.append(RiskFactor.ELEVATED_HR_STATIONARY)

    return factors


def classify(factors: list[RiskFactor]) -> RiskLevel:
    if len(factors) >= DANGER_FACTOR_COUNT:
        return RiskLevel.DANGER
    if factors:
        return RiskLevel.WARNING
    return RiskLevel.SAFE


def assess_risk(ctx: SessionContext) -> RiskAssessment:
    """
    Run one evaluation cycle against the current tracking state.

    The result is stored on the session for status reads. A danger result
    may schedule an auto-SOS, see maybe_schedule_auto_sos.
    """
    now = ctx.wall_clock()
    state = ctx.state
    factors = evaluate_risk_factors(
        hour=now.hour,
        altitude=state.altitude,
        heart_rate=state.heart_rate,
        speed=state.speed,
    )
    level = classify(factors)
    assessment = RiskAssessment(
        level=level,
        factors=factors,
        evaluated_at=now,
        label=RISK_LABELS[level],
    )
    ctx.last_assessment = assessment

    logger.info(
        "risk_assessed",
        level=level.value,
        factors=[factor.value for factor in factors],
    )
    maybe_schedule_auto_sos(ctx, assessment)
    return assessment


def maybe_schedule_auto_sos(
    ctx: SessionContext, assessment: RiskAssessment
) -> Optional[Job]:
    """
    Schedule an automatic SOS for a danger assessment.

    Fires only when the gate draw passes (probability auto_sos_probability on
    the session generator). The auto-SOS toggle is checked when the job runs,
    not when it is scheduled.
    """
    if assessment.level is not RiskLevel.DANGER or ctx.emergency_active:
        return None
    if float(ctx.rng.random()) >= ctx.auto_sos_probability:
        return None

    logger.info("auto_sos_scheduled", delay_s=ctx.auto_sos_delay_s)
    return track_trigger(
        ctx,
        ctx.scheduler.call_later(
            ctx.auto_sos_delay_s, lambda: _fire_auto_sos(ctx), name="auto_sos"
        ),
    )


def _fire_auto_sos(ctx: SessionContext) -> bool:
    if not ctx.auto_sos_enabled:
        logger.info("auto_sos_skipped", reason="disabled")
        return False
    if ctx.emergency_active:
        return False
    notify(ctx, "Auto SOS triggered due to high risk factors", NoticeLevel.ERROR)
    return trigger_emergency(ctx)
