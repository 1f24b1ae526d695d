from datetime import date

from django.test import TestCase

from notifications.services.status import notify_review_status_changes, pending_reviews
from notifications.tests.factories import make_company, make_cycle, make_review, make_staff
from notifications.tests.fakes import RecordingGateway
from performance.models import PerformanceReview

Status = PerformanceReview.Status


class ReviewStatusNotifierTest(TestCase):

    def setUp(self):
        company = make_company()
        self.employee = make_staff(company, token="token-emp")
        self.cycle = make_cycle(company, today=date(2025, 3, 1))
        self.gateway = RecordingGateway()

    def move(self, review, status):
        review.status = status
        review.save(update_fields=["status"])

    def test_each_transition_is_notified_once(self):
        review = make_review(self.cycle, self.employee)

        notify_review_status_changes(gateway=self.gateway)
        notify_review_status_changes(gateway=self.gateway)
        self.move(review, Status.SELF_REVIEW_SUBMITTED)
        notify_review_status_changes(gateway=self.gateway)

        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            'Your performance review for "Q1-2025" has been updated to Self review pending.',
            'Your performance review for "Q1-2025" has been updated to Self review submitted.',
        ])

    def test_missed_transitions_collapse_to_latest_status(self):
        self.employee.fcm_token = ""
        self.employee.save(update_fields=["fcm_token"])
        review = make_review(self.cycle, self.employee)

        notify_review_status_changes(gateway=self.gateway)
        self.move(review, Status.MANAGER_REVIEW_PENDING)
        notify_review_status_changes(gateway=self.gateway)
        self.move(review, Status.COMPLETED)

        self.employee.fcm_token = "token-emp"
        self.employee.save(update_fields=["fcm_token"])
        result = notify_review_status_changes(gateway=self.gateway)

        self.assertEqual(result.sent, 1)
        self.assertEqual(self.gateway.bodies_for("token-emp"), [
            'Your performance review for "Q1-2025" has been updated to Completed.',
        ])
        self.assertEqual(pending_reviews(), [])

    def test_draft_reviews_are_not_announced(self):
        make_review(self.cycle, self.employee, status=Status.DRAFT)

        result = notify_review_status_changes(gateway=self.gateway)

        self.assertEqual(result.pending, 0)

    def test_payload_carries_collapse_tag(self):
        review = make_review(self.cycle, self.employee)

        notify_review_status_changes(gateway=self.gateway)

        data = self.gateway.sent[0]["data"]
        self.assertEqual(data["status"], "self-review-pending")
        self.assertEqual(data["android_tag"], f"perf_review_{self.employee.pk}_{review.pk}")
