"""
notifications/services/reminders/review_deadlines.py

Deadline reminders for active review cycles.

Each cycle has three deadlines (self, manager, HR). On the days where
the distance to a deadline hits one of the configured thresholds, the
reviewers that still owe work are reminded once per threshold:

- self:    each employee, marker on the review
- manager: one summary per manager, marker on every review in the batch
- HR:      one business-wide count per HR/Admin user, marker on the cycle
"""

import logging
from datetime import datetime

from django.utils import timezone

from notifications import conf
from notifications.models import NotificationMarker
from notifications.services import ledger
from notifications.services.grouping import group_records
from notifications.services.guard import NotificationUnit, fan_out, try_send
from notifications.services.recipients import hr_staff_ids, resolve_staff
from notifications.services.results import CollectorResult
from performance.models import PerformanceReview, ReviewCycle

logger = logging.getLogger(__name__)

RecordType = NotificationMarker.RecordType
Kind = NotificationMarker.Kind


# ============================================================
# DAY ARITHMETIC
# ============================================================

def local_date(value):
    """Normalise a date or datetime to the local calendar day."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def days_remaining(deadline, today):
    """Whole days from local midnight `today` to local midnight `deadline`."""
    return (local_date(deadline) - local_date(today)).days


def due_label(days):
    if days == 0:
        return "due today"
    if days == 1:
        return "due tomorrow"
    return f"due in {days} days"


def _counted(count, word):
    """`1 review` / `3 reviews`."""
    if count == 1:
        return f"{count} {word}"
    return f"{count} {word}s"


def _is_are(count):
    return "is" if count == 1 else "are"


def reminder_data(event_type, cycle, days, **extra):
    data = {
        "module": "performance",
        "type": event_type,
        "cycle": cycle.name,
        "cycleId": cycle.pk,
        "days": days,
    }
    data.update(extra)
    return data


# ============================================================
# SELF REVIEW
# ============================================================

def remind_self_reviewers(cycle, days, *, gateway, resolver=resolve_staff):
    """Returns (pending, sent)."""
    discriminator = str(days)
    label = due_label(days)

    reviews = ledger.unmarked(
        cycle.reviews.filter(status__in=PerformanceReview.AWAITING_SELF),
        record_type=RecordType.PERFORMANCE_REVIEW,
        kind=Kind.SELF_DEADLINE,
        discriminator=discriminator,
    ).order_by("pk")
    reviews = list(reviews)

    def commit(members):
        ledger.commit(
            record_type=RecordType.PERFORMANCE_REVIEW,
            record_ids=[member.pk for member in members],
            kind=Kind.SELF_DEADLINE,
            discriminator=discriminator,
        )

    sent = 0
    for review in reviews:
        unit = NotificationUnit(
            recipient_id=review.employee_id,
            title=f"Self review {label}",
            body=(
                f'Your self review for "{cycle.name}" is {label}. '
                f"Please submit it before the deadline."
            ),
            data=reminder_data(
                "self_review_deadline", cycle, days, reviewId=review.pk,
            ),
            members=[review],
        )
        if try_send(unit, gateway=gateway, commit=commit, resolver=resolver):
            sent += 1

    return len(reviews), sent


# ============================================================
# MANAGER REVIEW
# ============================================================

def remind_managers(cycle, days, *, gateway, resolver=resolve_staff):
    """
    One reminder per manager summarising how many reports are waiting.

    The "already sent" check reads the first review of the batch; the
    commit stamps every review in the batch so the next pass sees the
    whole batch as notified.
    """
    discriminator = str(days)
    label = due_label(days)

    reviews = (
        cycle.reviews
        .filter(
            status__in=PerformanceReview.AWAITING_MANAGER,
            manager__isnull=False,
        )
        .order_by("manager_id", "pk")
    )
    batches = group_records(reviews, key=lambda review: review.manager_id)

    def commit(members):
        ledger.commit(
            record_type=RecordType.PERFORMANCE_REVIEW,
            record_ids=[member.pk for member in members],
            kind=Kind.MANAGER_DEADLINE,
            discriminator=discriminator,
        )

    pending = sent = 0
    for batch in batches:
        if ledger.is_marked(
            record_type=RecordType.PERFORMANCE_REVIEW,
            record_id=batch.representative.pk,
            kind=Kind.MANAGER_DEADLINE,
            discriminator=discriminator,
        ):
            continue

        pending += 1
        count = len(batch.members)
        unit = NotificationUnit(
            recipient_id=batch.key,
            title=f"Manager reviews {label}",
            body=(
                f"{_counted(count, 'team member review')} for "
                f'"{cycle.name}" {_is_are(count)} awaiting your feedback. '
                f"Manager review deadline is {label}."
            ),
            data=reminder_data(
                "manager_review_deadline", cycle, days, pendingCount=count,
            ),
            members=batch.members,
        )
        if try_send(unit, gateway=gateway, commit=commit, resolver=resolver):
            sent += 1

    return pending, sent


# ============================================================
# HR REVIEW
# ============================================================

def remind_hr(cycle, days, *, gateway, resolver=resolve_staff):
    """
    Business-wide count sent to every HR/Admin of the cycle's tenant.

    The threshold marker lives on the cycle and is committed once at
    least one HR recipient was reached.
    """
    discriminator = str(days)
    label = due_label(days)

    if ledger.is_marked(
        record_type=RecordType.REVIEW_CYCLE,
        record_id=cycle.pk,
        kind=Kind.HR_DEADLINE,
        discriminator=discriminator,
    ):
        return 0, 0

    count = cycle.reviews.filter(status__in=PerformanceReview.AWAITING_HR).count()
    if count == 0:
        return 0, 0

    units = [
        NotificationUnit(
            recipient_id=staff_id,
            title=f"HR reviews {label}",
            body=(
                f"{_counted(count, 'review')} in \"{cycle.name}\" "
                f"{_is_are(count)} awaiting HR review. HR review deadline is {label}."
            ),
            data=reminder_data("hr_review_deadline", cycle, days, pendingCount=count),
        )
        for staff_id in hr_staff_ids(cycle.company_id)
    ]

    def commit(members):
        ledger.commit(
            record_type=RecordType.REVIEW_CYCLE,
            record_ids=[member.pk for member in members],
            kind=Kind.HR_DEADLINE,
            discriminator=discriminator,
        )

    delivered = fan_out(
        units,
        members=[cycle],
        gateway=gateway,
        commit=commit,
        resolver=resolver,
    )

    return 1, (1 if delivered else 0)


# ============================================================
# ENTRY POINT
# ============================================================

DEADLINES = (
    ("self", "self_review_deadline", remind_self_reviewers),
    ("manager", "manager_review_deadline", remind_managers),
    ("hr", "hr_review_deadline", remind_hr),
)


def send_review_deadline_reminders(
    *,
    gateway,
    resolver=resolve_staff,
    today=None,
    thresholds=None,
):
    today = local_date(today or timezone.localdate())
    thresholds = frozenset(thresholds) if thresholds is not None else conf.reminder_thresholds()

    result = CollectorResult(name="review_deadlines")

    for cycle in ReviewCycle.active(today).order_by("pk"):
        for role, field, remind in DEADLINES:
            days = days_remaining(getattr(cycle, field), today)

            if days < 0 or days not in thresholds:
                continue

            pending, sent = remind(cycle, days, gateway=gateway, resolver=resolver)
            result.add(pending=pending, sent=sent)

            if pending:
                logger.info(
                    "review_deadlines: cycle=%s role=%s days=%s pending=%s sent=%s",
                    cycle.pk, role, days, pending, sent,
                )

    return result
