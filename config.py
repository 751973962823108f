"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file (TRAIL_ prefix)."""

    # Simulation timers (seconds)
    drift_period_s: float = 5.0
    heart_rate_period_s: float = 3.0
    risk_period_s: float = 10.0
    stream_period_s: float = 5.0
    broker_period_s: float = 15.0

    # Auto-SOS
    auto_sos_enabled: bool = False
    auto_sos_probability: float = 0.05
    auto_sos_delay_s: float = 5.0

    # Simulated broker link
    broker_flap_probability: float = 0.05

    # Random generator seed; None draws fresh entropy
    rng_seed: Optional[int] = None

    # Synthetic positioning (Chennai, Tamil Nadu)
    base_lat: float = 13.0827
    base_lng: float = 80.2707
    location_variance: float = 0.1

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TRAIL_",
    }


settings = Settings()
