"""
tests/test_onboarding.py

Unit tests for tracker/services/onboarding.py.
"""

import re

import numpy as np
import pytest

from tests.fixtures import build_registration_form, build_session
from tracker.errors import RegistrationError
from tracker.schemas import NoticeLevel
from tracker.services.onboarding import (
    generate_did,
    register_user,
    run_document_scan,
    scan_status,
)

_DID_PATTERN = re.compile(r"^did:ethr:0x[0-9a-f]{32}$")


def test_register_user_stores_profile() -> None:
    ctx = build_session()

    profile = register_user(ctx, build_registration_form())

    assert profile.name == "Asha Raman"
    assert profile.did is None
    assert ctx.profile is profile
    assert ctx.notices[-1].message == "Registration data captured successfully!"


def test_register_user_rejects_missing_fields() -> None:
    ctx = build_session()
    form = build_registration_form(phone="")

    with pytest.raises(RegistrationError):
        register_user(ctx, form)

    assert ctx.profile is None
    assert ctx.notices[-1].level is NoticeLevel.ERROR


def test_register_user_rejects_bad_email() -> None:
    ctx = build_session()
    with pytest.raises(RegistrationError):
        register_user(ctx, build_registration_form(email="not-an-email"))


def test_generate_did_format() -> None:
    did = generate_did(np.random.default_rng(3))
    assert _DID_PATTERN.match(did)


@pytest.mark.parametrize(
    ("progress", "expected"),
    [
        (10.0, "Detecting document..."),
        (45.0, "Processing OCR..."),
        (75.0, "Extracting data..."),
        (95.0, None),
        (104.0, "Document verified successfully!"),
    ],
)
def test_scan_status_stages(progress: float, expected: str | None) -> None:
    assert scan_status(progress) == expected


def test_document_scan_assigns_did() -> None:
    ctx = build_session()
    register_user(ctx, build_registration_form())

    run_document_scan(ctx)
    # at least 5% per 0.3 s step, so 20 steps always finish
    ctx.scheduler.advance(30 * 0.3)

    assert ctx.scan.complete is True
    assert ctx.scan.status == "Document verified successfully!"
    assert _DID_PATTERN.match(ctx.profile.did)
    assert not any(job.name == "document_scan" for job in ctx.scheduler.jobs)

    ctx.scheduler.advance(1.5)
    assert ctx.notices[-1].message == "Blockchain DID created successfully!"


def test_document_scan_requires_registration() -> None:
    ctx = build_session()
    with pytest.raises(RegistrationError):
        run_document_scan(ctx)


def test_second_scan_rejected_while_running() -> None:
    ctx = build_session()
    register_user(ctx, build_registration_form())
    run_document_scan(ctx)
    ctx.scheduler.advance(0.3)

    with pytest.raises(RegistrationError):
        run_document_scan(ctx)

    ctx.scheduler.advance(18.0)

    messages = [notice.message for notice in ctx.notices]
    assert messages.count("Document scan complete!") == 1
    assert messages.count("Blockchain DID created successfully!") == 1


def test_rescan_allowed_after_completion() -> None:
    ctx = build_session()
    register_user(ctx, build_registration_form())
    run_document_scan(ctx)
    ctx.scheduler.advance(30 * 0.3)

    run_document_scan(ctx)

    assert ctx.scan.complete is False
