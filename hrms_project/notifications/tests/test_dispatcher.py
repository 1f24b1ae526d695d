from django.test import TestCase

from accounts.models import Staff
from notifications.services import dispatcher
from notifications.services.dispatcher import get_collectors, run_pass
from notifications.services.results import CollectorResult
from notifications.tests.factories import (
    make_attendance,
    make_company,
    make_leave,
    make_staff,
)
from notifications.tests.fakes import RecordingGateway


def exploding_collector(**kwargs):
    raise RuntimeError("collector exploded")


def quiet_collector(**kwargs):
    return CollectorResult(name="quiet", pending=2, sent=1)


class RunPassTest(TestCase):

    def setUp(self):
        self.company = make_company()
        self.employee = make_staff(self.company, token="token-emp")
        self.gateway = RecordingGateway()

    def test_full_pass_then_quiet_pass(self):
        make_leave(self.employee)
        make_attendance(self.employee)

        first = run_pass(gateway=self.gateway)
        second = run_pass(gateway=self.gateway)

        self.assertEqual((first.pending, first.sent), (2, 2))
        self.assertEqual(first.errors, {})
        self.assertEqual((second.pending, second.sent), (0, 0))
        self.assertEqual(second.summary(), "nothing pending")
        self.assertEqual(
            sorted(self.gateway.titles()),
            ["Attendance Updated", "Leave Approved"],
        )

    def test_failing_collector_does_not_stop_the_rest(self):
        with self.assertLogs("notifications.services.dispatcher", level="ERROR"):
            report = run_pass(
                gateway=self.gateway,
                collectors=[
                    ("exploding", exploding_collector),
                    ("quiet", quiet_collector),
                ],
            )

        self.assertEqual(report.errors, {"exploding": "collector exploded"})
        self.assertEqual([result.name for result in report.results], ["quiet"])
        self.assertEqual(report.summary(), "quiet: pending=2 sent=1 | exploding: ERROR")

    def test_overlapping_pass_is_skipped(self):
        dispatcher._pass_lock.acquire()
        try:
            self.assertTrue(dispatcher.is_pass_running())
            with self.assertLogs("notifications.services.dispatcher", level="WARNING"):
                report = run_pass(gateway=self.gateway)
        finally:
            dispatcher._pass_lock.release()

        self.assertIsNone(report)
        self.assertFalse(dispatcher.is_pass_running())

    def test_lock_is_released_after_a_pass(self):
        run_pass(gateway=self.gateway, collectors=[("quiet", quiet_collector)])

        self.assertFalse(dispatcher.is_pass_running())

    def test_deactivated_staff_lose_their_token(self):
        gone = make_staff(self.company, token="token-gone", status="Deactivated")
        shouting = make_staff(self.company, token="token-shout", status="DEACTIVATED")
        make_leave(gone)

        report = run_pass(gateway=self.gateway)

        self.assertEqual(report.tokens_cleared, 2)
        gone.refresh_from_db()
        shouting.refresh_from_db()
        self.employee.refresh_from_db()
        self.assertEqual((gone.fcm_token, shouting.fcm_token), ("", ""))
        self.assertEqual(self.employee.fcm_token, "token-emp")
        self.assertEqual(self.gateway.bodies_for("token-gone"), [])
        self.assertEqual(Staff.objects.exclude(fcm_token="").count(), 1)

    def test_collector_order(self):
        names = [name for name, _ in get_collectors()]

        self.assertEqual(names[0], "leave_approved")
        self.assertEqual(names[-3:], ["attendance_status", "review_status", "review_deadlines"])
