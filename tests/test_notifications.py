"""Tests for notification dispatch and operator alerts."""

import asyncio
import logging

import httpx
from fastapi import BackgroundTasks

from hirehive.config import settings
from hirehive.services.alerts import page_operator
from hirehive.services.notifications import (
    NEW_APPLICATION,
    NEW_JOB,
    WELCOME,
    LoggingNotifier,
    NotificationDispatcher,
    NotificationIntent,
    WebhookNotifier,
    build_notifier,
)

from conftest import RecordingNotifier


def intent(recipients=("a@mail.test",), template=NEW_JOB, **data):
    data = data or {"job_id": "j1", "title": "Welder", "company": "Forge"}
    return NotificationIntent(template=template, recipients=tuple(recipients), data=data)


class TestIntent:
    def test_subjects(self):
        assert intent().subject == "New Job Alert: Welder at Forge"
        applicant = intent(template=NEW_APPLICATION, title="Welder", applicant_name="Asha")
        assert applicant.subject == "New Applicant: Asha for Welder"

    def test_subject_falls_back_to_template(self):
        assert intent(template="digest").subject == "digest"
        assert intent(template=NEW_JOB, title="Welder").subject == NEW_JOB

    def test_welcome_subject(self):
        assert intent(template=WELCOME, name="Asha", role="seeker").subject == "Welcome to the Hive, Asha!"


class TestDispatcher:
    def test_inline_delivery(self):
        notifier = RecordingNotifier()
        NotificationDispatcher(notifier).emit(intent())
        assert notifier.sent == [(["a@mail.test"], NEW_JOB, {"job_id": "j1", "title": "Welder", "company": "Forge"})]

    def test_empty_recipients_skipped(self):
        notifier = RecordingNotifier()
        NotificationDispatcher(notifier).emit(intent(recipients=()))
        assert notifier.sent == []

    def test_delivery_failure_is_logged_not_raised(self, caplog):
        dispatcher = NotificationDispatcher(RecordingNotifier(fail=True))
        with caplog.at_level(logging.WARNING, logger="hirehive.services.notifications"):
            dispatcher.emit(intent())
        assert "delivery failed" in caplog.text

    def test_background_delivery_waits_for_response(self):
        notifier = RecordingNotifier()
        tasks = BackgroundTasks()
        dispatcher = NotificationDispatcher(notifier, tasks)
        for i in range(3):
            dispatcher.emit(intent(recipients=(f"s{i}@mail.test",)))
        assert notifier.sent == []
        assert len(tasks.tasks) == 3

        asyncio.run(tasks())

        assert [r[0] for r in notifier.sent] == [[f"s{i}@mail.test"] for i in range(3)]

    def test_background_failure_is_isolated(self, caplog):
        tasks = BackgroundTasks()
        NotificationDispatcher(RecordingNotifier(fail=True), tasks).emit(intent())
        with caplog.at_level(logging.WARNING, logger="hirehive.services.notifications"):
            asyncio.run(tasks())
        assert "delivery failed" in caplog.text

    def test_no_task_queued_without_recipients(self):
        tasks = BackgroundTasks()
        NotificationDispatcher(RecordingNotifier(), tasks).emit(intent(recipients=()))
        assert tasks.tasks == []


class TestNotifiers:
    def test_webhook_posts_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(202)

        WebhookNotifier("http://relay.test/send", transport=httpx.MockTransport(handler)).notify(
            ["a@mail.test"], NEW_JOB, {"title": "Welder"}
        )
        assert len(seen) == 1
        assert seen[0].url == "http://relay.test/send"
        assert b'"template":"new_job"' in seen[0].content.replace(b" ", b"")

    def test_webhook_error_status_is_isolated_by_dispatcher(self, caplog):
        relay = WebhookNotifier("http://relay.test/send", transport=httpx.MockTransport(lambda r: httpx.Response(503)))
        with caplog.at_level(logging.WARNING, logger="hirehive.services.notifications"):
            NotificationDispatcher(relay).emit(intent())
        assert "503" in caplog.text

    def test_build_notifier_follows_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "notification_webhook_url", "")
        assert isinstance(build_notifier(), LoggingNotifier)
        monkeypatch.setattr(settings, "notification_webhook_url", "http://relay.test/send")
        assert isinstance(build_notifier(), WebhookNotifier)



class TestOperatorAlert:
    def test_logs_critical_without_webhook(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "alert_webhook_url", "")
        with caplog.at_level(logging.CRITICAL, logger="hirehive.services.alerts"):
            page_operator("Counter diverged", employer_id="emp-1")
        assert "Counter diverged" in caplog.text
        assert "emp-1" in caplog.text

    def test_unreachable_webhook_does_not_raise(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "alert_webhook_url", "http://127.0.0.1:9/alerts")
        monkeypatch.setattr(settings, "notification_timeout", 0.5)
        with caplog.at_level(logging.ERROR, logger="hirehive.services.alerts"):
            page_operator("Counter diverged")
        assert "Alert webhook" in caplog.text
