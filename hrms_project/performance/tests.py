from datetime import date, timedelta

from django.test import TestCase

from accounts.models import Company, Staff
from performance.models import PerformanceReview, ReviewCycle


class ReviewCycleTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name="Acme")
        self.today = date(2025, 3, 1)

    def make_cycle(self, name, **fields):
        values = {
            "start_date": self.today - timedelta(days=30),
            "end_date": self.today + timedelta(days=30),
            "self_review_deadline": self.today,
            "manager_review_deadline": self.today,
            "hr_review_deadline": self.today,
        }
        values.update(fields)
        return ReviewCycle.objects.create(name=name, company=self.company, **values)

    def test_active_excludes_closed_and_ended_cycles(self):
        running = self.make_cycle("Q1-2025")
        draft = self.make_cycle("Q2-2025", status=ReviewCycle.Status.DRAFT)
        self.make_cycle("Q3-2024", status=ReviewCycle.Status.COMPLETED)
        self.make_cycle("Q4-2024", status=ReviewCycle.Status.CANCELLED)
        self.make_cycle("Q2-2024", end_date=self.today - timedelta(days=1))
        last_day = self.make_cycle("Q1-2024", end_date=self.today)

        active = set(ReviewCycle.active(self.today))

        self.assertEqual(active, {running, draft, last_day})


class PerformanceReviewTest(TestCase):

    def test_status_label(self):
        review = PerformanceReview(status=PerformanceReview.Status.MANAGER_REVIEW_PENDING)
        self.assertEqual(review.status_label, "Manager review pending")

        review.status = "calibration-pending"
        self.assertEqual(review.status_label, "Calibration pending")

    def test_staff_delivery_token(self):
        staff = Staff(fcm_token="  ")
        self.assertFalse(staff.has_delivery_token)
