"""
Approval outcome notifications.

Every approval-style collection (leave, expense, reimbursement,
payslip, loan, attendance) is handled by the same ApprovalNotifier,
configured with its model, the terminal status, the marker kind and a
message builder. One instance exists per (collection, outcome).
"""

import logging

from approvals.models import (
    ApprovalStatus,
    Attendance,
    ExpenseClaim,
    LeaveRequest,
    Loan,
    PayslipRequest,
    Reimbursement,
)
from notifications.models import NotificationMarker
from notifications.services import ledger
from notifications.services.guard import NotificationUnit, try_send
from notifications.services.recipients import resolve_staff
from notifications.services.results import CollectorResult

logger = logging.getLogger(__name__)

RecordType = NotificationMarker.RecordType
Kind = NotificationMarker.Kind

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


# ============================================================
# FORMAT HELPERS
# ============================================================

def format_date(value):
    """`5 Mar 2025`, the way the mobile app prints dates."""
    if not value:
        return ""
    return f"{value.day} {value:%b %Y}"


def format_amount(amount):
    if amount is None:
        return ""
    if amount == int(amount):
        return f"₹{int(amount)}"
    return f"₹{amount:.2f}"


def base_data(module, event_type, record, id_key):
    return {
        "module": module,
        "type": event_type,
        "staffId": record.employee_id,
        id_key: record.pk,
    }


# ============================================================
# MESSAGE BUILDERS  (record -> title, body, data)
# ============================================================

def leave_approved(leave):
    date = format_date(leave.start_date) or "the requested date"
    body = f"Your leave request approved for {leave.leave_type} on {date}"
    data = base_data("leave", "leave_approved", leave, "leaveId")
    data.update(leaveType=leave.leave_type, date=date)
    return "Leave Approved", body, data


def leave_rejected(leave):
    date = format_date(leave.start_date)
    if date:
        body = f"Your leave request for {leave.leave_type} on {date} was rejected."
    else:
        body = f"Your leave request for {leave.leave_type} was rejected."
    data = base_data("leave", "leave_rejected", leave, "leaveId")
    data.update(leaveType=leave.leave_type, date=date)
    return "Leave Rejected", body, data


def _amount_phrase(amount):
    formatted = format_amount(amount)
    return f"of {formatted} " if formatted else ""


def expense_approved(expense):
    body = (
        f"Your {expense.expense_type} request "
        f"{_amount_phrase(expense.amount)}has been approved."
    )
    return "Expense Approved", body, base_data(
        "expense", "expense_approved", expense, "expenseId",
    )


def expense_rejected(expense):
    return "Expense Rejected", "Your expense request has been rejected.", base_data(
        "expense", "expense_rejected", expense, "expenseId",
    )


def reimbursement_approved(claim):
    body = (
        f"Your {claim.reimbursement_type} reimbursement "
        f"{_amount_phrase(claim.amount)}has been approved."
    )
    return "Reimbursement Approved", body, base_data(
        "reimbursement", "reimbursement_approved", claim, "reimbursementId",
    )


def reimbursement_rejected(claim):
    return (
        "Reimbursement Rejected",
        "Your reimbursement request has been rejected.",
        base_data("reimbursement", "reimbursement_rejected", claim, "reimbursementId"),
    )


def month_name(month):
    """`Mar` for 3; out-of-range values are printed as they are."""
    if month and 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(month)


def payslip_approved(payslip):
    month = month_name(payslip.month)
    body = f"Your payslip request for {month} {payslip.year} has been approved."
    return "Payslip Approved", body, base_data(
        "payslip", "payslip_approved", payslip, "payslipId",
    )


def payslip_rejected(payslip):
    return "Payslip Rejected", "Your payslip request has been rejected.", base_data(
        "payslip", "payslip_rejected", payslip, "payslipId",
    )


def loan_approved(loan):
    body = f"Your loan request {_amount_phrase(loan.amount)}has been approved."
    return "Loan Approved", body, base_data("loan", "loan_approved", loan, "loanId")


def loan_rejected(loan):
    return "Loan Rejected", "Your loan request has been rejected.", base_data(
        "loan", "loan_rejected", loan, "loanId",
    )


def attendance_approved(attendance):
    date = format_date(attendance.date)
    if date:
        body = f"Your attendance for {date} has been approved."
    else:
        body = "Your attendance has been approved."
    return "Attendance Approved", body, base_data(
        "attendance", "attendance_approved", attendance, "attendanceId",
    )


def attendance_rejected(attendance):
    return (
        "Attendance Rejected",
        "Your attendance request has been rejected.",
        base_data("attendance", "attendance_rejected", attendance, "attendanceId"),
    )


# ============================================================
# GENERIC NOTIFIER
# ============================================================

class ApprovalNotifier:
    """
    Notify the employee once when a request reaches `status`.

    A record is pending while it has the terminal status, a decision
    timestamp, and no `kind` marker in the ledger.
    """

    def __init__(self, *, name, model, record_type, status, kind, build_message):
        self.name = name
        self.model = model
        self.record_type = record_type
        self.status = status
        self.kind = kind
        self.build_message = build_message

    def __repr__(self):
        return f"<ApprovalNotifier {self.name}>"

    def pending(self):
        queryset = self.model.objects.filter(
            status=self.status,
            approved_at__isnull=False,
        )
        queryset = ledger.unmarked(
            queryset,
            record_type=self.record_type,
            kind=self.kind,
        )
        return list(queryset.order_by("pk"))

    def build_unit(self, record):
        title, body, data = self.build_message(record)
        return NotificationUnit(
            recipient_id=record.employee_id,
            title=title,
            body=body,
            data=data,
            members=[record],
        )

    def commit(self, members):
        ledger.commit(
            record_type=self.record_type,
            record_ids=[member.pk for member in members],
            kind=self.kind,
        )

    def run(self, *, gateway, resolver=resolve_staff, today=None):
        records = self.pending()
        result = CollectorResult(name=self.name, pending=len(records))

        for record in records:
            if try_send(
                self.build_unit(record),
                gateway=gateway,
                commit=self.commit,
                resolver=resolver,
            ):
                result.sent += 1

        if records:
            logger.info(
                "%s: pending=%s sent=%s",
                self.name, result.pending, result.sent,
            )

        return result


def _pair(name, model, record_type, approved, rejected):
    return [
        ApprovalNotifier(
            name=f"{name}_approved",
            model=model,
            record_type=record_type,
            status=ApprovalStatus.APPROVED,
            kind=Kind.APPROVED,
            build_message=approved,
        ),
        ApprovalNotifier(
            name=f"{name}_rejected",
            model=model,
            record_type=record_type,
            status=ApprovalStatus.REJECTED,
            kind=Kind.REJECTED,
            build_message=rejected,
        ),
    ]


APPROVAL_NOTIFIERS = [
    *_pair("leave", LeaveRequest, RecordType.LEAVE, leave_approved, leave_rejected),
    *_pair("expense", ExpenseClaim, RecordType.EXPENSE, expense_approved, expense_rejected),
    *_pair(
        "reimbursement", Reimbursement, RecordType.REIMBURSEMENT,
        reimbursement_approved, reimbursement_rejected,
    ),
    *_pair("payslip", PayslipRequest, RecordType.PAYSLIP, payslip_approved, payslip_rejected),
    *_pair("loan", Loan, RecordType.LOAN, loan_approved, loan_rejected),
    *_pair(
        "attendance", Attendance, RecordType.ATTENDANCE,
        attendance_approved, attendance_rejected,
    ),
]
