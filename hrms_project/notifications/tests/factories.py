import itertools
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from accounts.models import Company, Staff, User
from approvals.models import Attendance, LeaveRequest, Loan, PayslipRequest
from performance.models import PerformanceReview, ReviewCycle

_sequence = itertools.count(1)


def make_company(name=None):
    return Company.objects.create(name=name or f"Company {next(_sequence)}")


def make_staff(company, *, token="", manager=None, user=None, status="Active", name=None):
    number = next(_sequence)
    return Staff.objects.create(
        employee_code=f"EMP{number:04d}",
        name=name or f"Staff {number}",
        company=company,
        manager=manager,
        user=user,
        status=status,
        fcm_token=token,
    )


def make_hr(company, *, token, role=User.Role.HR, is_active=True):
    number = next(_sequence)
    user = User.objects.create_user(
        username=f"hr{number}",
        password="password",
        role=role,
        company=company,
        is_active=is_active,
    )
    return make_staff(company, token=token, user=user, name=f"HR {number}")


def make_leave(employee, *, status="Approved", decided=True, start_date=date(2025, 3, 5)):
    return LeaveRequest.objects.create(
        employee=employee,
        company=employee.company,
        leave_type="Casual",
        start_date=start_date,
        end_date=start_date,
        status=status,
        approved_at=timezone.now() if decided else None,
    )


def make_loan(employee, *, status="Approved", amount=Decimal("25000.00")):
    return Loan.objects.create(
        employee=employee,
        company=employee.company,
        loan_type="Personal",
        amount=amount,
        status=status,
        approved_at=timezone.now(),
    )


def make_payslip(employee, *, month, year=2025, status="Approved"):
    return PayslipRequest.objects.create(
        employee=employee,
        company=employee.company,
        month=month,
        year=year,
        status=status,
        approved_at=timezone.now(),
    )


def make_attendance(employee, *, day=date(2025, 3, 5), status="Present"):
    return Attendance.objects.create(
        employee=employee,
        company=employee.company,
        date=day,
        status=status,
    )


def make_cycle(company, *, today, name="Q1-2025", self_in=30, manager_in=40, hr_in=50, **extra):
    """Deadlines are given as day offsets from `today`."""
    fields = {
        "name": name,
        "company": company,
        "start_date": today - timedelta(days=10),
        "end_date": today + timedelta(days=60),
        "self_review_deadline": today + timedelta(days=self_in),
        "manager_review_deadline": today + timedelta(days=manager_in),
        "hr_review_deadline": today + timedelta(days=hr_in),
    }
    fields.update(extra)
    return ReviewCycle.objects.create(**fields)


def make_review(cycle, employee, *, status=PerformanceReview.Status.SELF_REVIEW_PENDING, manager=None):
    return PerformanceReview.objects.create(
        cycle=cycle,
        employee=employee,
        manager=manager,
        company=cycle.company,
        status=status,
    )
