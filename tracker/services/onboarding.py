"""
tracker/services/onboarding.py

Registration, simulated document scan and DID assignment.
The DID is a cosmetic random identifier with no cryptographic backing.
"""

from typing import Any, Optional

import numpy as np
import structlog
from pydantic import ValidationError

from tracker.constants import (
    DID_PREFIX,
    DID_RANDOM_BYTES,
    SCAN_QR_DELAY_S,
    SCAN_STEP_MAX,
    SCAN_STEP_MIN,
    SCAN_STEP_PERIOD_S,
)
from tracker.context import SessionContext
from tracker.errors import RegistrationError
from tracker.scheduler import Job
from tracker.schemas import NoticeLevel, RegistrationForm, ScanProgress, UserProfile
from tracker.services.notification import notify

logger = structlog.get_logger(__name__)

# (upper bound exclusive, status text) in progress order
_SCAN_STAGES: list[tuple[float, str]] = [
    (30.0, "Detecting document..."),
    (60.0, "Processing OCR..."),
    (90.0, "Extracting data..."),
]
_SCAN_COMPLETE_STATUS = "Document verified successfully!"
_SCAN_COMPLETE_AT = 100.0


def register_user(ctx: SessionContext, form: dict[str, Any]) -> UserProfile:
    """Validate registration data and store the profile on the session."""
    try:
        parsed = RegistrationForm.model_validate(form)
    except ValidationError as exc:
        logger.warning("registration_invalid", errors=exc.error_count())
        notify(ctx, "Please fill in all required fields", NoticeLevel.ERROR)
        raise RegistrationError(str(exc)) from exc

    profile = UserProfile(
        name=parsed.full_name,
        email=parsed.email,
        phone=parsed.phone,
        nationality=parsed.nationality,
        emergency_contact=parsed.emergency_contact,
        registration_date=ctx.wall_clock(),
    )
    ctx.profile = profile
    logger.info("user_registered", nationality=profile.nationality)
    notify(ctx, "Registration data captured successfully!")
    return profile


def generate_did(rng: np.random.Generator) -> str:
    """Return did:ethr:0x followed by 32 random hex digits."""
    raw = rng.integers(0, 256, size=DID_RANDOM_BYTES)
    return DID_PREFIX + "".join(f"{int(b):02x}" for b in raw)


def scan_status(progress: float) -> Optional[str]:
    """Status text for a scan progress value, None if it does not change."""
    if progress >= _SCAN_COMPLETE_AT:
        return _SCAN_COMPLETE_STATUS
    for upper, text in _SCAN_STAGES:
        if progress < upper:
            return text
    return None


def run_document_scan(ctx: SessionContext) -> Job:
    """
    Start a simulated document scan for the registered user.

    Progress grows by a random step every SCAN_STEP_PERIOD_S. At 100% the
    profile receives a DID and the scan job stops. Only one scan may run
    at a time.
    """
    if ctx.profile is None:
        raise RegistrationError("document scan requires a registered user")
    if ctx.scan is not None and not ctx.scan.complete:
        raise RegistrationError("document scan already in progress")

    ctx.scan = ScanProgress()
    job: Optional[Job] = None

    def step() -> None:
        scan = ctx.scan
        scan.progress += float(ctx.rng.uniform(SCAN_STEP_MIN, SCAN_STEP_MAX))
        status = scan_status(scan.progress)
        if status is not None:
            scan.status = status
        if scan.progress < _SCAN_COMPLETE_AT:
            return

        scan.complete = True
        job.cancel()
        ctx.profile.did = generate_did(ctx.rng)
        logger.info("document_scan_complete", did=ctx.profile.did)
        notify(ctx, "Document scan complete!")
        ctx.scheduler.call_later(
            SCAN_QR_DELAY_S,
            lambda: notify(ctx, "Blockchain DID created successfully!"),
            name="did_ready",
        )

    job = ctx.scheduler.every(SCAN_STEP_PERIOD_S, step, name="document_scan")
    logger.info("document_scan_started")
    return job
