"""
tracker/context.py

SessionContext: the explicit state shared by every tracker service.
Holds the tracking state, emergency flag, auto-SOS toggle, random generator,
wall clock and scheduler for one hiking session.
"""

import collections
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import numpy as np

from config import settings
from tracker.constants import NOTICE_HISTORY_MAX_LEN
from tracker.scheduler import Job, Scheduler
from tracker.schemas import (
    EmergencyResponse,
    Location,
    Notice,
    RiskAssessment,
    ScanProgress,
    TrackingState,
    UserProfile,
)


@dataclass
class SessionContext:
    """Mutable per-session state passed to each service function."""

    state: TrackingState
    rng: np.random.Generator
    scheduler: Scheduler
    wall_clock: Callable[[], datetime] = datetime.now

    # Emergency
    emergency_active: bool = False
    emergency: Optional[EmergencyResponse] = None
    emergency_jobs: list[Job] = field(default_factory=list)
    # Delayed SOS triggers (demo scenario, auto-SOS) not yet fired
    pending_triggers: list[Job] = field(default_factory=list)

    # External IoT tracker; phone GPS only when off
    iot_tracker_enabled: bool = False

    # Auto-SOS gate
    auto_sos_enabled: bool = False
    auto_sos_probability: float = 0.05
    auto_sos_delay_s: float = 5.0

    # Synthetic positioning
    base_location: Location = field(
        default_factory=lambda: Location(lat=settings.base_lat, lng=settings.base_lng)
    )
    location_variance: float = 0.1

    broker_flap_probability: float = 0.05
    broker_status: dict[str, str] = field(
        default_factory=lambda: {"mqtt": "connected", "kafka": "connected"}
    )

    last_assessment: Optional[RiskAssessment] = None
    notices: collections.deque = field(
        default_factory=lambda: collections.deque(maxlen=NOTICE_HISTORY_MAX_LEN)
    )

    # Onboarding
    profile: Optional[UserProfile] = None
    scan: Optional[ScanProgress] = None


def build_context(
    seed: Optional[int] = None,
    clock: Optional[Callable[[], float]] = None,
    wall_clock: Optional[Callable[[], datetime]] = None,
) -> SessionContext:
    """
    Build a SessionContext from application settings.

    seed overrides settings.rng_seed; clock and wall_clock are injectable
    so ticks and hour-of-day can be controlled in tests.
    """
    return SessionContext(
        state=TrackingState(),
        rng=np.random.default_rng(seed if seed is not None else settings.rng_seed),
        scheduler=Scheduler(clock),
        wall_clock=wall_clock or datetime.now,
        auto_sos_enabled=settings.auto_sos_enabled,
        auto_sos_probability=settings.auto_sos_probability,
        auto_sos_delay_s=settings.auto_sos_delay_s,
        base_location=Location(lat=settings.base_lat, lng=settings.base_lng),
        location_variance=settings.location_variance,
        broker_flap_probability=settings.broker_flap_probability,
    )
