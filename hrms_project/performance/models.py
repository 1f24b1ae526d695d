from django.db import models
from django.utils import timezone

from accounts.models import Company, Staff


class ReviewCycle(models.Model):
    """
    A time-boxed review period with one deadline per reviewer role.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        ACTIVE = "active", "Active"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    CLOSED_STATUSES = (Status.COMPLETED, Status.CANCELLED)

    name = models.CharField(max_length=150)

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="review_cycles",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )

    start_date = models.DateField()
    end_date = models.DateField()

    self_review_deadline = models.DateField()
    manager_review_deadline = models.DateField()
    hr_review_deadline = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"],
                name="unique_review_cycle_name_per_company",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.company})"

    @classmethod
    def active(cls, today=None):
        """Cycles that are still open and whose period has not ended."""
        today = today or timezone.localdate()
        return (
            cls.objects
            .exclude(status__in=cls.CLOSED_STATUSES)
            .filter(end_date__gte=today)
        )


class PerformanceReview(models.Model):

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SELF_REVIEW_PENDING = "self-review-pending", "Self review pending"
        SELF_REVIEW_SUBMITTED = "self-review-submitted", "Self review submitted"
        MANAGER_REVIEW_PENDING = "manager-review-pending", "Manager review pending"
        MANAGER_REVIEW_SUBMITTED = "manager-review-submitted", "Manager review submitted"
        HR_REVIEW_PENDING = "hr-review-pending", "HR review pending"
        HR_REVIEW_SUBMITTED = "hr-review-submitted", "HR review submitted"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    # Which reviewer currently owes work on the review
    AWAITING_SELF = (Status.DRAFT, Status.SELF_REVIEW_PENDING)
    AWAITING_MANAGER = (Status.SELF_REVIEW_SUBMITTED, Status.MANAGER_REVIEW_PENDING)
    AWAITING_HR = (Status.MANAGER_REVIEW_SUBMITTED, Status.HR_REVIEW_PENDING)

    cycle = models.ForeignKey(
        ReviewCycle,
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    employee = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        related_name="performance_reviews",
    )

    manager = models.ForeignKey(
        Staff,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_reviews",
    )

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="performance_reviews",
    )

    status = models.CharField(
        max_length=30,
        choices=Status.choices,
        default=Status.DRAFT,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["cycle", "status"], name="review_cycle_status_idx"),
        ]

    def __str__(self):
        return f"{self.employee} | {self.cycle.name} | {self.status}"

    @property
    def status_label(self):
        return dict(self.Status.choices).get(
            self.status,
            self.status.replace("-", " ").capitalize() or "Updated",
        )
