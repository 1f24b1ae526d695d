from django.db import models

from accounts.models import Company, Staff


class ApprovalStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    REJECTED = "Rejected", "Rejected"


class ApprovalRequest(models.Model):
    """
    Common shape of every approval-style record.

    `approved_at` is the decision timestamp: it is stamped when the
    request is approved *or* rejected.
    """

    employee = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        related_name="+",
    )

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="+",
    )

    status = models.CharField(
        max_length=20,
        default=ApprovalStatus.PENDING,
        db_index=True,
    )

    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


# ============================================================
# LEAVE
# ============================================================

class LeaveRequest(ApprovalRequest):
    LEAVE_TYPES = [
        ("Sick", "Sick"),
        ("Casual", "Casual"),
        ("Earned", "Earned"),
        ("Unpaid", "Unpaid"),
        ("Maternity", "Maternity"),
        ("Paternity", "Paternity"),
        ("Other", "Other"),
    ]

    leave_type = models.CharField(max_length=20, choices=LEAVE_TYPES)
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.TextField(blank=True)

    def __str__(self):
        return f"{self.employee} | {self.leave_type} | {self.start_date}"


# ============================================================
# EXPENSE / REIMBURSEMENT
# ============================================================

class ExpenseClaim(ApprovalRequest):
    expense_type = models.CharField(max_length=50, default="Expense")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.TextField(blank=True)

    def __str__(self):
        return f"{self.employee} | {self.expense_type} | {self.amount}"


class Reimbursement(ApprovalRequest):
    REIMBURSEMENT_TYPES = [
        ("Travel", "Travel"),
        ("Meal", "Meal"),
        ("Accommodation", "Accommodation"),
        ("Food", "Food"),
        ("Other", "Other"),
    ]

    reimbursement_type = models.CharField(max_length=20, choices=REIMBURSEMENT_TYPES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateField()
    description = models.TextField(blank=True)

    def __str__(self):
        return f"{self.employee} | {self.reimbursement_type} | {self.amount}"


# ============================================================
# PAYSLIP
# ============================================================

class PayslipRequest(ApprovalRequest):
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()

    def __str__(self):
        return f"{self.employee} | {self.month:02d}/{self.year}"


# ============================================================
# LOAN
# ============================================================

class Loan(ApprovalRequest):
    LOAN_TYPES = [
        ("Personal", "Personal"),
        ("Advance", "Advance"),
        ("Emergency", "Emergency"),
    ]

    loan_type = models.CharField(max_length=20, choices=LOAN_TYPES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    tenure_months = models.PositiveSmallIntegerField(default=1)

    def __str__(self):
        return f"{self.employee} | {self.loan_type} | {self.amount}"


# ============================================================
# ATTENDANCE
# ============================================================

class Attendance(ApprovalRequest):
    """
    One attendance row. Regularisation requests move through
    Pending / Approved / Rejected; the daily marking statuses
    (Present, Absent, ...) are assigned by HR or the auto-marker.
    Several rows can exist for the same employee and date.
    """

    STATUS_CHOICES = [
        ("Present", "Present"),
        ("Absent", "Absent"),
        ("Half Day", "Half Day"),
        ("On Leave", "On Leave"),
        ("Not Marked", "Not Marked"),
        ("Pending", "Pending"),
        ("Approved", "Approved"),
        ("Rejected", "Rejected"),
    ]

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default="Not Marked",
        db_index=True,
    )

    date = models.DateField(db_index=True)
    punch_in = models.DateTimeField(null=True, blank=True)
    punch_out = models.DateTimeField(null=True, blank=True)
    remarks = models.TextField(blank=True)

    class Meta(ApprovalRequest.Meta):
        indexes = [
            models.Index(fields=["employee", "date"], name="attendance_employee_date_idx"),
        ]

    def __str__(self):
        return f"{self.employee} | {self.date} | {self.status}"
