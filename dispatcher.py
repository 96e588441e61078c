"""Webhook dispatcher for the Medication Reminder.

Posts a composed WebhookMessage to the configured endpoint exactly once.
There is no retry: a failed delivery is terminal for the run and the
external scheduler's next invocation is the recovery path.
"""

from typing import Optional

import httpx
from pydantic import BaseModel, Field

from errors import DeliveryError
from logger_config import setup_logger
from schemas import WebhookMessage

logger = setup_logger(__name__)

REQUEST_TIMEOUT = 30.0


class DeliveryResult(BaseModel):
    """Outcome of a successful delivery."""

    status_code: int = Field(..., description="HTTP status returned by the webhook")
    body: str = Field(default="", description="Response body, usually empty for 204")


async def send_webhook(
    url: str,
    message: WebhookMessage,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DeliveryResult:
    """Send a webhook message.

    Args:
        url: Webhook endpoint
        message: Composed message
        transport: Optional httpx transport (tests pass httpx.MockTransport)

    Returns:
        DeliveryResult for a 2xx response

    Raises:
        DeliveryError: On timeout, network failure, a malformed URL, or a non-2xx response
    """
    payload = message.to_payload()
    logger.info(f"Posting reminder with {len(payload['embeds'][0]['fields'])} field(s) to webhook")

    try:
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
            response = await client.post(url, json=payload)
    except httpx.TimeoutException as e:
        raise DeliveryError(f"Timeout while posting to webhook: {e}") from e
    except httpx.RequestError as e:
        raise DeliveryError(f"Network error while posting to webhook: {e}") from e
    except httpx.InvalidURL as e:
        raise DeliveryError(f"Invalid webhook URL: {e}") from e

    if not response.is_success:
        raise DeliveryError(
            f"Webhook responded with status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    return DeliveryResult(status_code=response.status_code, body=response.text)
