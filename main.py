#!/usr/bin/env python3
"""Entry point for the Medication Reminder.

Runs one reminder cycle and exits. Meant to be invoked by an external
scheduler (cron, CI schedule) every few hours.
"""

import asyncio
import sys

from config import Settings
from logger_config import setup_logger
from reminder import run_reminder

logger = setup_logger(__name__)


def main() -> int:
    """Main entry point - send one reminder and return the exit code."""
    logger.info("=" * 60)
    logger.info("Medication Reminder")
    logger.info("=" * 60)

    settings = Settings()
    outcome = asyncio.run(run_reminder(settings))

    if not outcome.ok:
        logger.error(f"Reminder run failed (attempted delivery: {outcome.attempted})")

    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
