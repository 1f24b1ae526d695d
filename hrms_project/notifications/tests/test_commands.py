from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from notifications.management.commands import run_notification_dispatcher
from notifications.models import NotificationMarker
from notifications.services.delivery import get_gateway
from notifications.tests.factories import make_company, make_leave, make_staff

LOG_ONLY = {"GATEWAY": "notifications.services.delivery.LogOnlyGateway"}
FCM = {"GATEWAY": "notifications.services.delivery.FCMGateway"}


class SendPendingNotificationsTest(TestCase):

    def setUp(self):
        get_gateway.cache_clear()
        self.addCleanup(get_gateway.cache_clear)

    def test_log_only_pass_commits_markers(self):
        employee = make_staff(make_company(), token="token-emp")
        make_leave(employee)
        out = StringIO()

        with self.assertLogs("notifications.services.delivery", level="INFO") as logs:
            call_command("send_pending_notifications", "--log-only", stdout=out)

        self.assertIn("1 sent of 1 pending", out.getvalue())
        self.assertTrue(NotificationMarker.objects.exists())
        self.assertIn("Leave Approved", "\n".join(logs.output))

    @override_settings(NOTIFICATIONS=FCM, FIREBASE_CREDENTIALS_PATH="/nonexistent/firebase.json")
    def test_missing_credentials_fail_the_command(self):
        with self.assertRaisesMessage(CommandError, "Delivery gateway unavailable"):
            call_command("send_pending_notifications", stdout=StringIO())

        self.assertFalse(NotificationMarker.objects.exists())


class RunNotificationDispatcherTest(TestCase):

    def setUp(self):
        get_gateway.cache_clear()
        self.addCleanup(get_gateway.cache_clear)

    @override_settings(NOTIFICATIONS=FCM, FIREBASE_CREDENTIALS_PATH="")
    def test_refuses_to_start_without_gateway(self):
        with self.assertRaisesMessage(CommandError, "Delivery gateway unavailable"):
            call_command("run_notification_dispatcher", stdout=StringIO())

    def test_rejects_non_positive_interval(self):
        with self.assertRaisesMessage(CommandError, "positive"):
            call_command("run_notification_dispatcher", "--interval", "0", stdout=StringIO())

    @override_settings(NOTIFICATIONS=LOG_ONLY)
    def test_stops_cleanly_on_interrupt(self):
        fake_scheduler = mock.Mock(running=True)
        fake_scheduler.start.side_effect = KeyboardInterrupt
        out = StringIO()

        with mock.patch.object(
            run_notification_dispatcher,
            "build_scheduler",
            return_value=fake_scheduler,
        ) as build:
            call_command("run_notification_dispatcher", "--interval", "30", stdout=out)

        self.assertEqual(build.call_args.kwargs["interval_seconds"], 30)
        fake_scheduler.shutdown.assert_called_once_with(wait=False)
        self.assertIn("Notification dispatcher stopped", out.getvalue())
