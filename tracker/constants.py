"""
tracker/constants.py

Simulation bands and risk thresholds used by the tracker services.
All numeric safety values must be referenced from this module.
Magic numbers in business logic are prohibited.
"""

# ── Initial tracking state ───────────────────────────────────
HEART_RATE_BASELINE: float = 72.0  # bpm, also the post-emergency reset value
BATTERY_INITIAL: float = 95.0  # percent

# ── Battery drain ────────────────────────────────────────────
BATTERY_FLOOR: float = 20.0
BATTERY_DRAIN_STEP: float = 0.1  # percent per status refresh

# ── Normal regime bands [low, high) ──────────────────────────
HEART_RATE_NORMAL_MIN: float = 65.0
HEART_RATE_NORMAL_MAX: float = 85.0
SPEED_NORMAL_MIN: float = 1.0  # km/h
SPEED_NORMAL_MAX: float = 6.0
ALTITUDE_NORMAL_MIN: float = 100.0  # meters
ALTITUDE_NORMAL_MAX: float = 150.0
DIRECTION_MAX: float = 360.0  # degrees
LOCATION_DRIFT: float = 0.0001  # degrees, full width of the per-tick jitter

# ── Emergency regime ─────────────────────────────────────────
HEART_RATE_EMERGENCY_MIN: float = 120.0
HEART_RATE_EMERGENCY_MAX: float = 140.0

# ── Risk predicates ──────────────────────────────────────────
NIGHTFALL_START_HOUR: int = 18  # hour >= 18
NIGHTFALL_END_HOUR: int = 6  # hour <= 6
HIGH_ALTITUDE_M: float = 200.0
ELEVATED_HEART_RATE: float = 100.0
STATIONARY_SPEED: float = 0.5  # km/h
DANGER_FACTOR_COUNT: int = 2

# ── Activity classification (km/h) ───────────────────────────
WALKING_SPEED_MAX: float = 2.0
RUNNING_SPEED_MIN: float = 6.0

# ── Emergency response timeline (seconds after activation) ───
EVIDENCE_CAPTURE_DELAY_S: float = 2.0
FUNDS_RESERVED_DELAY_S: float = 3.0
TEAM_DISPATCH_DELAY_S: float = 2.0
RESCUE_ETA_DELAY_S: float = 4.0
SERVICES_CONTACT_DELAY_S: float = 2.0
DEMO_TRIGGER_DELAY_S: float = 2.0
RESPONSE_TEAM: str = "Mountain Rescue Team #7 dispatched"
RESCUE_ETA: str = "12-15 minutes"

# ── Demo scenario ────────────────────────────────────────────
DEMO_TRAIL_LAT: float = 13.1234
DEMO_TRAIL_LNG: float = 80.2567
DEMO_PANIC_HEART_RATE: float = 140.0
DEMO_RESET_SPEED: float = 1.2
DEMO_RESET_ALTITUDE: float = 120.0
DEMO_RESET_DIRECTION: float = 180.0

# ── Broker link simulation ───────────────────────────────────
BROKER_RECOVERY_DELAY_S: float = 3.0

# ── Document scan simulation ─────────────────────────────────
SCAN_STEP_PERIOD_S: float = 0.3
SCAN_STEP_MIN: float = 5.0  # percent
SCAN_STEP_MAX: float = 20.0
SCAN_QR_DELAY_S: float = 1.5
DID_PREFIX: str = "did:ethr:0x"
DID_RANDOM_BYTES: int = 16

# ── Notices ──────────────────────────────────────────────────
NOTICE_HISTORY_MAX_LEN: int = 50
