from django.db import models
from django.contrib.auth.models import AbstractUser


class Company(models.Model):
    """Tenant. Every business record belongs to exactly one company."""

    name = models.CharField(max_length=200, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "companies"

    def __str__(self):
        return self.name


class User(AbstractUser):
    """Login account. HR and Admin users receive business-wide reminders."""

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        HR = "hr", "HR"
        MANAGER = "manager", "Manager"
        EMPLOYEE = "employee", "Employee"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.EMPLOYEE,
        db_index=True,
    )

    company = models.ForeignKey(
        Company,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
    )

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username


class Staff(models.Model):
    """
    Employee record.

    `fcm_token` is written by the mobile pairing flow and cleared on
    logout or deactivation; an empty string means the staff member
    currently has no device to push to.
    """

    class Status(models.TextChoices):
        ACTIVE = "Active", "Active"
        DEACTIVATED = "Deactivated", "Deactivated"

    employee_code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=200)

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="staff",
    )

    user = models.OneToOneField(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="staff_profile",
    )

    manager = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="direct_reports",
    )

    status = models.CharField(
        max_length=20,
        default=Status.ACTIVE,
        db_index=True,
    )

    fcm_token = models.CharField(max_length=512, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "staff"

    def __str__(self):
        return f"{self.name} ({self.employee_code})"

    @property
    def has_delivery_token(self):
        return bool(self.fcm_token and self.fcm_token.strip())
