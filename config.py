"""Configuration module for the Medication Reminder.

This module provides configuration settings using Pydantic Settings.
Environment variables can be used to override default values.
"""

from typing import Optional

from pydantic_settings import BaseSettings

from errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings for the Medication Reminder.

    All settings can be overridden via environment variables.
    Example: export DISCORD_WEBHOOK_URL="https://discord.com/api/webhooks/..."
    """

    # Delivery Configuration
    DISCORD_WEBHOOK_URL: Optional[str] = None
    """Webhook endpoint the reminder is posted to. Required at run time."""

    # Locale Configuration
    TIMEZONE: str = "Asia/Tokyo"
    """Time zone the schedule and greetings are evaluated in"""

    # Presentation Configuration
    BOT_USERNAME: str = "薬リマインダーBot"
    """Display name shown on the webhook message"""

    BOT_AVATAR_URL: Optional[str] = "https://cdn-icons-png.flaticon.com/512/2966/2966327.png"
    """Avatar image shown next to the display name"""

    THUMBNAIL_URL: Optional[str] = None
    """Optional thumbnail image for the embed"""

    FOOTER_ICON_URL: Optional[str] = None
    """Optional icon shown next to the footer text"""

    MAX_UPCOMING: int = 2
    """Maximum number of upcoming doses listed"""

    class Config:
        """Pydantic config"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


def require_webhook_url(settings: Settings) -> str:
    """Return the configured webhook URL.

    Raises:
        ConfigurationError: If DISCORD_WEBHOOK_URL is missing or blank
    """
    url = (settings.DISCORD_WEBHOOK_URL or "").strip()
    if not url:
        raise ConfigurationError("DISCORD_WEBHOOK_URL environment variable is not set")
    return url
