"""
Notification intents and their fire-and-forget dispatch.

The engine never waits on delivery. ``NotificationDispatcher.emit`` is called
only after the primary write has committed; delivery is queued on FastAPI
background tasks and every delivery failure ends here as a log line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
from fastapi import BackgroundTasks

from hirehive.config import settings

logger = logging.getLogger(__name__)

NEW_JOB = "new_job"
NEW_APPLICATION = "new_application"
WELCOME = "welcome"

SUBJECTS = {
    NEW_JOB: "New Job Alert: {title} at {company}",
    NEW_APPLICATION: "New Applicant: {applicant_name} for {title}",
    WELCOME: "Welcome to the Hive, {name}!",
}


@dataclass(frozen=True)
class NotificationIntent:
    template: str
    recipients: tuple[str, ...]
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def subject(self) -> str:
        try:
            return SUBJECTS[self.template].format(**self.data)
        except (KeyError, IndexError):
            return self.template


class Notifier(Protocol):
    def notify(self, recipients: list[str], template: str, data: dict[str, Any]) -> None: ...


class LoggingNotifier:
    """Records intents in the log; used when no delivery relay is configured."""

    def notify(self, recipients: list[str], template: str, data: dict[str, Any]) -> None:
        intent = NotificationIntent(template=template, recipients=tuple(recipients), data=data)
        logger.info(f"[notify] {intent.subject} -> {len(recipients)} recipient(s)")


class WebhookNotifier:
    """Hands intents to the e-mail relay over HTTP."""

    def __init__(self, url: str, timeout: float = 5.0, transport: httpx.BaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    def notify(self, recipients: list[str], template: str, data: dict[str, Any]) -> None:
        payload = {"recipients": recipients, "template": template, "data": data}
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(self.url, json=payload)
            response.raise_for_status()


class NotificationDispatcher:
    """Hands intents to the notifier off the request path and isolates their failures.

    Inside a request, delivery is queued on the response's ``BackgroundTasks``
    and runs once the response is sent. Without one (CLI, tests) it runs inline,
    still isolated.
    """

    def __init__(self, notifier: Notifier, background_tasks: BackgroundTasks | None = None):
        self.notifier = notifier
        self.background_tasks = background_tasks

    def emit(self, intent: NotificationIntent) -> None:
        if not intent.recipients:
            logger.debug(f"[notify] {intent.template}: no recipients, skipped")
            return
        if self.background_tasks is None:
            self._deliver(intent)
            return
        self.background_tasks.add_task(self._deliver, intent)

    def _deliver(self, intent: NotificationIntent) -> None:
        try:
            self.notifier.notify(list(intent.recipients), intent.template, dict(intent.data))
        except Exception as e:
            logger.warning(f"[notify] {intent.template} delivery failed: {e}")


def build_notifier() -> Notifier:
    if settings.notification_webhook_url:
        return WebhookNotifier(settings.notification_webhook_url, timeout=settings.notification_timeout)
    return LoggingNotifier()
