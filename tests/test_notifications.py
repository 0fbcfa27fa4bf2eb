"""Tests for SMS/email notifications (providers mocked)."""

import asyncio
import threading
from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from conftest import make_plan
import notifications
import store
from schemas import NotificationType, UserCreate, UserSettings
from validation import format_phone, phone_error


# ─────────────────────────────────────────────────────────────────────────────
# Phone Numbers
# ─────────────────────────────────────────────────────────────────────────────


class TestPhoneFormat:
    """Every format ends up as +233..."""

    @pytest.mark.parametrize("raw", ["0241234567", "241234567", "233241234567", "+233 24-123-4567", "(024) 123.4567"])
    def test_formats(self, raw):
        assert format_phone(raw) == "+233241234567"

    def test_errors(self):
        assert phone_error("") is None
        assert phone_error("024abc4567") == "Phone number can only contain digits"
        assert phone_error("12345") == "Phone number is too short"
        assert phone_error("1234567890123456") == "Phone number is too long"


# ─────────────────────────────────────────────────────────────────────────────
# Templates
# ─────────────────────────────────────────────────────────────────────────────


class TestTemplates:
    def test_sms_custom_message_wins(self):
        assert notifications.sms_message(NotificationType.reminder, "Hi") == "Hi"
        assert "streak" in notifications.sms_message(NotificationType.missed_checkin)

    def test_email_greeting(self):
        html = notifications.email_html(NotificationType.achievement, "Ama")
        assert "Hey Ama!" in html
        assert "Congratulations" in html

    def test_welcome_sms(self):
        sms = notifications.welcome_sms("Ama Mensah", "Python Mastery", date(2026, 1, 5))
        assert sms.startswith("🚀 Ama, ")
        assert '"Python Mastery" starts Jan 5, 2026' in sms

    def test_welcome_without_date(self):
        assert "starts soon" in notifications.welcome_sms(None, "Plan", None)

    def test_summary_escaped(self):
        html = notifications.plan_summary_email_html("Ama", "Plan <1>", "Month 1 & 2")
        assert "Plan &lt;1&gt;" in html
        assert "Month 1 &amp; 2" in html


# ─────────────────────────────────────────────────────────────────────────────
# Providers
# ─────────────────────────────────────────────────────────────────────────────


class TestProviders:
    def test_sms_without_key(self):
        with patch.object(notifications, "ARKESEL_API_KEY", ""):
            assert asyncio.run(notifications.send_sms("0241234567", "Hi")) is False

    def test_sms_accepted(self):
        response = httpx.Response(200, json={"code": "ok", "message": "Successfully Sent"})
        with patch.object(notifications, "ARKESEL_API_KEY", "key"), \
                patch("httpx.AsyncClient.get", new=AsyncMock(return_value=response)) as get:
            assert asyncio.run(notifications.send_sms("0241234567", "Hi")) is True
        assert get.call_args.kwargs["params"]["to"] == "+233241234567"

    def test_sms_v2_error_status(self):
        response = httpx.Response(401, json={"message": "Invalid API key"})
        with patch.object(notifications, "ARKESEL_API_KEY", "key"), \
                patch("httpx.AsyncClient.post", new=AsyncMock(return_value=response)):
            with pytest.raises(notifications.NotificationError) as exc:
                asyncio.run(notifications.send_sms_v2("0241234567", "Hi"))
        assert exc.value.status_code == 401
        assert exc.value.message == "Invalid API key"

    def test_sms_non_object_body(self):
        response = httpx.Response(200, json=["ok"])
        with patch.object(notifications, "ARKESEL_API_KEY", "key"), \
                patch("httpx.AsyncClient.get", new=AsyncMock(return_value=response)):
            assert asyncio.run(notifications.send_sms("0241234567", "Hi")) is False

    def test_email_non_object_body(self):
        with patch.object(notifications, "RESEND_API_KEY", "key"), \
                patch("httpx.AsyncClient.post", new=AsyncMock(return_value=httpx.Response(200, json="queued"))):
            assert asyncio.run(notifications.send_email("ama@example.com", "S", "<p>x</p>")) is False

    def test_email_needs_id(self):
        with patch.object(notifications, "RESEND_API_KEY", "key"), \
                patch("httpx.AsyncClient.post", new=AsyncMock(return_value=httpx.Response(200, json={"id": "e1"}))):
            assert asyncio.run(notifications.send_email("ama@example.com", "S", "<p>x</p>")) is True
        with patch.object(notifications, "RESEND_API_KEY", "key"), \
                patch("httpx.AsyncClient.post", new=AsyncMock(return_value=httpx.Response(422, json={"error": "x"}))):
            assert asyncio.run(notifications.send_email("ama@example.com", "S", "<p>x</p>")) is False


class TestNotifyUser:
    def test_only_given_channels(self):
        with patch("notifications.send_sms", new=AsyncMock(return_value=True)) as sms, \
                patch("notifications.send_email", new=AsyncMock(return_value=True)) as email:
            results = asyncio.run(notifications.notify_user(NotificationType.reminder, phone="0241234567"))
        assert results == {"sms": True}
        sms.assert_awaited_once()
        email.assert_not_awaited()


# ─────────────────────────────────────────────────────────────────────────────
# Batch Reminder
# ─────────────────────────────────────────────────────────────────────────────

TODAY = date(2026, 1, 6)


@pytest.fixture
def population(db):
    """checked: already checked in | pending: needs both channels | quiet: notifications off"""
    for email, name in [("checked@example.com", "Checked"), ("pending@example.com", "Pending"),
                        ("quiet@example.com", "Quiet")]:
        settings = None
        if name == "Quiet":
            settings = UserSettings(email_notifications=False, sms_notifications=False)
        store.create_user(db, UserCreate(email=email, name=name, phone_number="0241234567", settings=settings))
        plan = store.add_plan(db, email, make_plan())
        if name == "Checked":
            store.apply_progress(db, email, plan.plan_id, lambda s: s.check_in(TODAY))


class TestBatchReminder:
    def test_counts(self, db, population):
        with patch("notifications.send_sms", new=AsyncMock(return_value=True)) as sms, \
                patch("notifications.send_email", new=AsyncMock(return_value=True)):
            results = asyncio.run(notifications.send_batch_reminders(db, TODAY))
        assert results == {"total": 1, "smsSent": 1, "emailSent": 1, "failed": 0}
        assert "Pending, " in sms.call_args.args[1]

    def test_failures_counted(self, db, population):
        with patch("notifications.send_sms", new=AsyncMock(return_value=False)), \
                patch("notifications.send_email", new=AsyncMock(return_value=True)):
            results = asyncio.run(notifications.send_batch_reminders(db, TODAY))
        assert results["failed"] == 1
        assert results["emailSent"] == 1

    def test_odd_provider_bodies_do_not_stop_the_batch(self, db, population):
        with patch.object(notifications, "ARKESEL_API_KEY", "key"), \
                patch.object(notifications, "RESEND_API_KEY", "key"), \
                patch("httpx.AsyncClient.get", new=AsyncMock(return_value=httpx.Response(200, json=[1]))), \
                patch("httpx.AsyncClient.post", new=AsyncMock(return_value=httpx.Response(200, json="x"))):
            results = asyncio.run(notifications.send_batch_reminders(db, TODAY))
        assert results == {"total": 1, "smsSent": 0, "emailSent": 0, "failed": 2}

    def test_user_scan_runs_off_the_event_loop(self, db, population):
        loop_thread = threading.get_ident()
        scan_threads = []
        real_scan = notifications.scan_all_users

        def scan(session):
            scan_threads.append(threading.get_ident())
            return real_scan(session)

        with patch("notifications.scan_all_users", side_effect=scan), \
                patch("notifications.send_sms", new=AsyncMock(return_value=True)), \
                patch("notifications.send_email", new=AsyncMock(return_value=True)):
            asyncio.run(notifications.send_batch_reminders(db, TODAY))
        assert scan_threads and scan_threads[0] != loop_thread

    def test_archived_plan_check_in_ignored(self, db, population):
        doc = store.get_user(db, "checked@example.com").document
        store.archive_plan(db, "checked@example.com", doc.active_plan_id)
        doc = store.get_user(db, "checked@example.com").document
        assert notifications.needs_reminder(doc, TODAY)
