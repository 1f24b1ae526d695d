from django.db import models
from django.utils import timezone


class NotificationMarker(models.Model):
    """
    Proof that one notification occurrence was delivered.

    The dispatcher never writes business rows. Every "already sent"
    decision is read from, and committed to, this ledger:

    - single-flag:          (type, id, kind, "")      row exists
    - threshold-set:        (type, id, kind, "<day>") one row per day
    - last-notified-value:  (type, id, kind, "")      `value` holds the status
    """

    # =====================================================
    # RECORD TYPES (one per notifiable collection)
    # =====================================================
    class RecordType(models.TextChoices):
        LEAVE = "leave", "Leave"
        EXPENSE = "expense", "Expense"
        REIMBURSEMENT = "reimbursement", "Reimbursement"
        PAYSLIP = "payslip", "Payslip"
        LOAN = "loan", "Loan"
        ATTENDANCE = "attendance", "Attendance"
        PERFORMANCE_REVIEW = "performance_review", "Performance review"
        REVIEW_CYCLE = "review_cycle", "Review cycle"

    # =====================================================
    # MARKER KINDS
    # =====================================================
    class Kind(models.TextChoices):
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        STATUS_ASSIGNED = "status_assigned", "Status assigned"
        SELF_DEADLINE = "self_deadline", "Self review deadline"
        MANAGER_DEADLINE = "manager_deadline", "Manager review deadline"
        HR_DEADLINE = "hr_deadline", "HR review deadline"
        REVIEW_STATUS = "review_status", "Review status"

    # =====================================================
    # KEY
    # =====================================================
    record_type = models.CharField(
        max_length=30,
        choices=RecordType.choices,
    )

    record_id = models.PositiveBigIntegerField()

    kind = models.CharField(
        max_length=30,
        choices=Kind.choices,
    )

    discriminator = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Threshold day for threshold-set markers, empty otherwise",
    )

    # =====================================================
    # PAYLOAD
    # =====================================================
    value = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Last notified value for last-notified-value markers",
    )

    sent_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["record_type", "record_id", "kind", "discriminator"],
                name="unique_notification_marker",
            ),
        ]
        indexes = [
            models.Index(
                fields=["record_type", "kind", "record_id"],
                name="marker_lookup_idx",
            ),
        ]

    def __str__(self):
        key = f"{self.record_type}:{self.record_id} | {self.kind}"
        if self.discriminator:
            key = f"{key}[{self.discriminator}]"
        if self.value:
            key = f"{key} = {self.value}"
        return key
