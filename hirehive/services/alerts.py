"""Operator alerting for ledger inconsistencies."""

import logging
from typing import Any

import httpx

from hirehive.config import settings

logger = logging.getLogger(__name__)


def page_operator(message: str, **context: Any) -> None:
    """Log at CRITICAL and forward to the alert webhook when one is configured.

    Never raises; the caller is already handling a worse failure.
    """
    logger.critical(f"{message} {context}")
    if not settings.alert_webhook_url:
        return
    try:
        with httpx.Client(timeout=settings.notification_timeout) as client:
            response = client.post(
                settings.alert_webhook_url,
                json={"severity": "critical", "message": message, "context": context},
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Alert webhook HTTP error: {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"Alert webhook error: {e}")
