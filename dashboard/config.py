"""Dashboard configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    # Fall back to template for defaults
    template_path = Path(__file__).parent.parent / ".env.template"
    if template_path.exists():
        load_dotenv(template_path)

# Sheety endpoint for the de-escalation audit trail sheet
DEFAULT_SOURCE_URL = (
    "https://api.sheety.co/3f8ed38ec6cb4d5131024c60be0f9f80"
    "/antibioticDeEscalationAuditTrail/sheet1"
)


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-change-in-production")
    DEBUG = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    TESTING = False

    # Audit trail source
    DEESCALATION_SOURCE_URL = os.environ.get("DEESCALATION_SOURCE_URL", DEFAULT_SOURCE_URL)
    DEESCALATION_REQUEST_TIMEOUT = int(os.environ.get("DEESCALATION_REQUEST_TIMEOUT", "10"))

    # Polling
    DEESCALATION_POLL_INTERVAL = int(os.environ.get("DEESCALATION_POLL_INTERVAL", "30"))
    DEESCALATION_POLLER_ENABLED = (
        os.environ.get("DEESCALATION_POLLER_ENABLED", "true").lower() == "true"
    )

    # Recent recommendations table
    DEESCALATION_RECENT_LIMIT = int(os.environ.get("DEESCALATION_RECENT_LIMIT", "10"))


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration (no background polling)."""
    TESTING = True
    DEESCALATION_POLLER_ENABLED = False


def get_config():
    """Get configuration based on environment."""
    env = os.environ.get("FLASK_ENV", "development")
    if env == "production":
        return ProductionConfig()
    if env == "testing":
        return TestingConfig()
    return DevelopmentConfig()
