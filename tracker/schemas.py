"""
tracker/schemas.py

Pydantic data models for the tracker.
- TrackingState: live telemetry for the hiker, mutated in place on each tick
- RiskAssessment: derived result of one risk evaluation cycle
- TelemetryRecord: structured record handed to the streaming sink
- Notice: user-facing message (stands in for a UI toast)
- RegistrationForm / UserProfile: onboarding data
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from tracker.constants import BATTERY_INITIAL, HEART_RATE_BASELINE


class RiskLevel(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


class RiskFactor(str, Enum):
    NIGHTFALL = "nightfall"
    HIGH_ALTITUDE = "high_altitude"
    ELEVATED_HR_STATIONARY = "elevated_hr_stationary"


class ActivityType(str, Enum):
    STATIONARY = "stationary"
    WALKING = "walking"
    HIKING = "hiking"
    RUNNING = "running"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# Display text for each risk level
RISK_LABELS: dict[RiskLevel, str] = {
    RiskLevel.SAFE: "Safe",
    RiskLevel.WARNING: "Caution",
    RiskLevel.DANGER: "High Risk",
}


class Location(BaseModel):
    """GPS coordinates in decimal degrees."""

    lat: float
    lng: float


class TrackingState(BaseModel):
    """Current telemetry for the tracked hiker."""

    location: Location = Field(default_factory=lambda: Location(lat=0.0, lng=0.0))
    heart_rate: float = HEART_RATE_BASELINE  # bpm
    battery: float = BATTERY_INITIAL  # percent
    speed: float = 0.0  # km/h
    altitude: float = 0.0  # meters
    direction: float = 0.0  # degrees
    is_tracking: bool = False


class RiskAssessment(BaseModel):
    """Outcome of one risk evaluation cycle."""

    level: RiskLevel
    factors: list[RiskFactor]
    evaluated_at: datetime
    label: str


class TelemetryRecord(BaseModel):
    """Record streamed once per streaming period."""

    location: Location
    heart_rate: float
    timestamp: datetime


class Notice(BaseModel):
    level: NoticeLevel
    message: str
    created_at: datetime


class EmergencyResponse(BaseModel):
    """Simulated rescue response, filled in as the timeline progresses."""

    activated_at: datetime
    location: Location
    response_team: Optional[str] = None
    rescue_eta: Optional[str] = None


class ScanProgress(BaseModel):
    progress: float = 0.0  # percent, may overshoot 100 on the last step
    status: str = "Waiting for document..."
    complete: bool = False


class RegistrationForm(BaseModel):
    """Registration data captured during onboarding. All fields required."""

    full_name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=1)
    nationality: str = Field(min_length=1)
    emergency_contact: str = Field(min_length=1)


class UserProfile(BaseModel):
    name: str
    email: str
    phone: str
    nationality: str
    emergency_contact: str
    registration_date: datetime
    did: Optional[str] = None


# ── HTTP request / response models ───────────────────────────

class CancelEmergencyRequest(BaseModel):
    confirmed: bool


class AutoSosRequest(BaseModel):
    enabled: bool


class TrackerRequest(BaseModel):
    enabled: bool


class SessionStatus(BaseModel):
    """Snapshot returned by GET /status."""

    tracking: TrackingState
    emergency_active: bool
    auto_sos_enabled: bool
    iot_tracker_enabled: bool
    activity: ActivityType
    risk: Optional[RiskAssessment] = None
    emergency: Optional[EmergencyResponse] = None
    broker_status: dict[str, str]
