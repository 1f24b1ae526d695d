import logging

from notifications.models import NotificationMarker
from notifications.services import ledger
from notifications.services.delivery import ANDROID_TAG_KEY
from notifications.services.guard import NotificationUnit, try_send
from notifications.services.recipients import resolve_staff
from notifications.services.results import CollectorResult
from performance.models import PerformanceReview

logger = logging.getLogger(__name__)

RECORD_TYPE = NotificationMarker.RecordType.PERFORMANCE_REVIEW
KIND = NotificationMarker.Kind.REVIEW_STATUS


# ============================================================
# PERFORMANCE REVIEW STATUS CHANGED (→ EMPLOYEE)
# ============================================================

def pending_reviews():
    """
    Reviews past draft whose current status has not been notified.

    The last-notified status is compared with the live status, so a
    review that moved several steps while its employee was unreachable
    shows up once, with its latest status only.
    """
    queryset = (
        PerformanceReview.objects
        .select_related("cycle")
        .exclude(status=PerformanceReview.Status.DRAFT)
    )
    queryset = ledger.unnotified_value(
        queryset,
        record_type=RECORD_TYPE,
        kind=KIND,
        field="status",
    )
    return list(queryset.order_by("pk"))


def build_unit(review):
    cycle_name = review.cycle.name
    body = (
        f'Your performance review for "{cycle_name}" '
        f"has been updated to {review.status_label}."
    )

    return NotificationUnit(
        recipient_id=review.employee_id,
        title="Performance Review Updated",
        body=body,
        data={
            "module": "performance",
            "type": "performance_review_status_changed",
            "staffId": review.employee_id,
            "reviewId": review.pk,
            "reviewCycle": cycle_name,
            "status": review.status,
            ANDROID_TAG_KEY: f"perf_review_{review.employee_id}_{review.pk}",
        },
        members=[review],
    )


def commit(members):
    # Store the status that was delivered; the live row may have moved on.
    for review in members:
        ledger.advance_value(
            record_type=RECORD_TYPE,
            record_id=review.pk,
            kind=KIND,
            value=review.status,
        )


def notify_review_status_changes(*, gateway, resolver=resolve_staff, today=None):
    reviews = pending_reviews()
    result = CollectorResult(name="review_status", pending=len(reviews))

    for review in reviews:
        if try_send(
            build_unit(review),
            gateway=gateway,
            commit=commit,
            resolver=resolver,
        ):
            result.sent += 1

    if reviews:
        logger.info(
            "review_status: pending=%s sent=%s",
            result.pending, result.sent,
        )

    return result
