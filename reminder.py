"""Reminder pipeline: resolve time, evaluate schedule, compose, dispatch.

run_reminder never exits the process. It returns a ReminderOutcome and the
entry point maps that to an exit code.
"""

from datetime import datetime
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from composer import NotificationComposer, TipSelector
from config import Settings, require_webhook_url
from dispatcher import send_webhook
from dose_schedule import evaluate_schedule
from errors import ConfigurationError, DeliveryError
from logger_config import setup_logger
from schemas import WebhookMessage
from time_context import resolve_time_context

logger = setup_logger(__name__)


class ReminderOutcome(BaseModel):
    """Result of one run, success or failure."""

    ok: bool
    exit_code: int = Field(..., description="0 on confirmed delivery, 1 otherwise")
    attempted: bool = Field(default=False, description="Whether a delivery request was made")
    formatted_datetime: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    response_body: Optional[str] = None
    message: Optional[WebhookMessage] = None


def build_composer(settings: Settings, tip_selector: Optional[TipSelector] = None) -> NotificationComposer:
    return NotificationComposer(
        tip_selector=tip_selector,
        username=settings.BOT_USERNAME,
        avatar_url=settings.BOT_AVATAR_URL,
        thumbnail_url=settings.THUMBNAIL_URL,
        footer_icon_url=settings.FOOTER_ICON_URL,
    )


async def run_reminder(
    settings: Settings,
    now: Optional[datetime] = None,
    tip_selector: Optional[TipSelector] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ReminderOutcome:
    """Run one reminder cycle.

    Args:
        settings: Loaded settings
        now: Instant to run for; defaults to the system clock
        tip_selector: Optional health tip selector
        transport: Optional httpx transport for the dispatcher

    Returns:
        ReminderOutcome describing delivery or the failure that stopped it
    """
    try:
        url = require_webhook_url(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return ReminderOutcome(ok=False, exit_code=1, error=str(e))

    ctx = resolve_time_context(now, zone=settings.TIMEZONE)
    evaluation = evaluate_schedule(ctx, max_upcoming=settings.MAX_UPCOMING)
    message = build_composer(settings, tip_selector).compose(ctx, evaluation)

    try:
        result = await send_webhook(url, message, transport=transport)
    except DeliveryError as e:
        logger.error(f"❌ Failed to send Discord notification: {e.message}")
        if e.status_code is not None:
            logger.error(f"Response status: {e.status_code}")
            logger.error(f"Response data: {e.body}")
        return ReminderOutcome(
            ok=False,
            exit_code=1,
            attempted=True,
            formatted_datetime=ctx.formatted_datetime,
            status_code=e.status_code,
            error=e.message,
            response_body=e.body,
            message=message,
        )

    logger.info(f"✅ Discord notification sent successfully at {ctx.formatted_datetime}")
    logger.info(f"Response status: {result.status_code}")
    return ReminderOutcome(
        ok=True,
        exit_code=0,
        attempted=True,
        formatted_datetime=ctx.formatted_datetime,
        status_code=result.status_code,
        message=message,
    )
