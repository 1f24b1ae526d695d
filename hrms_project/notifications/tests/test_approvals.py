from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from django.test import TestCase

from notifications.services.approvals import (
    APPROVAL_NOTIFIERS,
    format_amount,
    format_date,
    leave_approved,
    month_name,
    payslip_approved,
)
from notifications.tests.factories import (
    make_company,
    make_leave,
    make_loan,
    make_payslip,
    make_staff,
)
from notifications.tests.fakes import RecordingGateway


def notifier(name):
    return next(n for n in APPROVAL_NOTIFIERS if n.name == name)


class ApprovalNotifierTest(TestCase):

    def setUp(self):
        self.company = make_company()
        self.employee = make_staff(self.company, token="token-emp")
        self.gateway = RecordingGateway()

    def test_approved_leave_is_notified_once(self):
        make_leave(self.employee)
        leave_approved_notifier = notifier("leave_approved")

        first = leave_approved_notifier.run(gateway=self.gateway)
        second = leave_approved_notifier.run(gateway=self.gateway)

        self.assertEqual((first.pending, first.sent), (1, 1))
        self.assertEqual((second.pending, second.sent), (0, 0))
        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            "Your leave request approved for Casual on 5 Mar 2025",
        ])

    def test_rejected_leave_uses_rejection_message(self):
        make_leave(self.employee, status="Rejected")

        notifier("leave_rejected").run(gateway=self.gateway)

        self.assertEqual(self.gateway.titles(), ["Leave Rejected"])
        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            "Your leave request for Casual on 5 Mar 2025 was rejected.",
        ])

    def test_undecided_and_pending_requests_are_ignored(self):
        make_leave(self.employee, decided=False)
        make_leave(self.employee, status="Pending")

        result = notifier("leave_approved").run(gateway=self.gateway)

        self.assertEqual(result.pending, 0)
        self.assertEqual(self.gateway.sent, [])

    def test_missing_token_is_retried_once_token_appears(self):
        employee = make_staff(self.company, token="")
        make_leave(employee)
        leave_approved_notifier = notifier("leave_approved")

        skipped = leave_approved_notifier.run(gateway=self.gateway)
        self.assertEqual((skipped.pending, skipped.sent), (1, 0))

        employee.fcm_token = "token-late"
        employee.save(update_fields=["fcm_token"])

        delivered = leave_approved_notifier.run(gateway=self.gateway)
        self.assertEqual((delivered.pending, delivered.sent), (1, 1))
        self.assertEqual(self.gateway.bodies_for("token-late"), [
            "Your leave request approved for Casual on 5 Mar 2025",
        ])

    def test_failed_delivery_is_retried_next_pass(self):
        make_loan(self.employee)
        failing = RecordingGateway(failing_tokens={"token-emp"})

        notifier("loan_approved").run(gateway=failing)
        retry = notifier("loan_approved").run(gateway=self.gateway)

        self.assertEqual(retry.sent, 1)
        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            "Your loan request of ₹25000 has been approved.",
        ])

    def test_approved_and_rejected_markers_are_independent(self):
        leave = make_leave(self.employee)
        notifier("leave_approved").run(gateway=self.gateway)

        leave.status = "Rejected"
        leave.save(update_fields=["status"])
        result = notifier("leave_rejected").run(gateway=self.gateway)

        self.assertEqual(result.sent, 1)

    def test_out_of_range_payslip_month_does_not_block_the_rest(self):
        make_payslip(self.employee, month=13)
        make_payslip(self.employee, month=3)

        result = notifier("payslip_approved").run(gateway=self.gateway)

        self.assertEqual((result.pending, result.sent), (2, 2))
        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            "Your payslip request for 13 2025 has been approved.",
            "Your payslip request for Mar 2025 has been approved.",
        ])

    def test_one_notifier_per_collection_and_outcome(self):
        names = [n.name for n in APPROVAL_NOTIFIERS]

        self.assertEqual(len(names), 12)
        self.assertEqual(len(set(names)), 12)
        self.assertIn("attendance_rejected", names)


class MessageFormatTest(TestCase):

    def test_format_date(self):
        self.assertEqual(format_date(date(2025, 3, 5)), "5 Mar 2025")
        self.assertEqual(format_date(None), "")

    def test_format_amount(self):
        self.assertEqual(format_amount(Decimal("2500.00")), "₹2500")
        self.assertEqual(format_amount(Decimal("12.5")), "₹12.50")
        self.assertEqual(format_amount(None), "")

    def test_leave_payload(self):
        leave = SimpleNamespace(
            pk=11, employee_id=3, leave_type="Sick", start_date=date(2025, 1, 20),
        )

        title, body, data = leave_approved(leave)

        self.assertEqual(title, "Leave Approved")
        self.assertEqual(body, "Your leave request approved for Sick on 20 Jan 2025")
        self.assertEqual(data["module"], "leave")
        self.assertEqual(data["leaveId"], 11)
        self.assertEqual(data["staffId"], 3)

    def test_month_name(self):
        self.assertEqual(month_name(1), "Jan")
        self.assertEqual(month_name(12), "Dec")
        self.assertEqual(month_name(13), "13")
        self.assertEqual(month_name(0), "0")

    def test_payslip_message_names_the_month(self):
        payslip = SimpleNamespace(pk=1, employee_id=3, month=2, year=2025)

        _, body, _ = payslip_approved(payslip)

        self.assertEqual(body, "Your payslip request for Feb 2025 has been approved.")
