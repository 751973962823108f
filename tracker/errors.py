"""
tracker/errors.py

Exception types raised by the tracker services.
"""


class TrailGuardianError(Exception):
    """Base class for tracker errors."""


class PositionUnavailableError(TrailGuardianError):
    """The positioning source denied access or has no fix."""


class RegistrationError(TrailGuardianError):
    """Registration data failed validation."""
