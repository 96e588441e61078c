"""Error taxonomy for the Medication Reminder.

Both error classes are terminal for a run: the entry point maps them to
exit code 1 and the next scheduled invocation is the only recovery path.
"""

from typing import Optional


class ReminderError(Exception):
    """Base class for reminder failures."""


class ConfigurationError(ReminderError):
    """Required configuration is missing. Raised before any network attempt."""


class DeliveryError(ReminderError):
    """The webhook could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
