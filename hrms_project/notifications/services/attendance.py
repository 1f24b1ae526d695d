"""
Attendance status-assignment notifications.

Several attendance rows can exist for one employee on one day. The
employee perceives them as a single "your attendance was marked"
event, so pending rows are grouped by (employee, date) and one push is
sent per group. A successful push marks every row in the group.
"""

import logging

from approvals.models import Attendance
from notifications.models import NotificationMarker
from notifications.services import ledger
from notifications.services.approvals import format_date
from notifications.services.delivery import ANDROID_TAG_KEY
from notifications.services.grouping import group_records, latest_updated
from notifications.services.guard import NotificationUnit, try_send
from notifications.services.recipients import resolve_staff
from notifications.services.results import CollectorResult

logger = logging.getLogger(__name__)

ASSIGNED_STATUSES = ("Present", "Absent", "Half Day", "On Leave")

RECORD_TYPE = NotificationMarker.RecordType.ATTENDANCE
KIND = NotificationMarker.Kind.STATUS_ASSIGNED


def pending_attendance():
    queryset = Attendance.objects.filter(status__in=ASSIGNED_STATUSES)
    queryset = ledger.unmarked(queryset, record_type=RECORD_TYPE, kind=KIND)
    return list(queryset.order_by("employee_id", "date", "pk"))


def pending_groups():
    return group_records(
        pending_attendance(),
        key=lambda row: (row.employee_id, row.date),
        pick_representative=latest_updated,
    )


def build_unit(group):
    row = group.representative
    date = format_date(row.date)
    status = (row.status or "Updated").strip()

    if date:
        body = f"Your attendance for {date} has been marked as {status}."
    else:
        body = f"Your attendance has been marked as {status}."

    data = {
        "module": "attendance",
        "type": "attendance_status_changed",
        "staffId": row.employee_id,
        "attendanceId": row.pk,
    }
    if row.date:
        data[ANDROID_TAG_KEY] = f"att_status_{row.employee_id}_{row.date.isoformat()}"

    return NotificationUnit(
        recipient_id=row.employee_id,
        title="Attendance Updated",
        body=body,
        data=data,
        members=group.members,
    )


def commit(members):
    ledger.commit(
        record_type=RECORD_TYPE,
        record_ids=[member.pk for member in members],
        kind=KIND,
    )


def send_attendance_status_notifications(*, gateway, resolver=resolve_staff, today=None):
    groups = pending_groups()
    result = CollectorResult(name="attendance_status", pending=len(groups))

    for group in groups:
        if try_send(
            build_unit(group),
            gateway=gateway,
            commit=commit,
            resolver=resolver,
        ):
            result.sent += 1

    if groups:
        logger.info(
            "attendance_status: groups=%s sent=%s",
            result.pending, result.sent,
        )

    return result
