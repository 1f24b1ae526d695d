"""
One dispatcher pass: token housekeeping, then every collector in order.

Passes never overlap. A second caller that arrives while a pass is in
flight gets None back immediately instead of waiting.

A collector that raises is logged and recorded in the report; the
remaining collectors still run. Nothing is rolled back because nothing
is committed before a confirmed delivery.
"""

import logging
import threading
from dataclasses import dataclass, field

from django.utils import timezone

from notifications.services.approvals import APPROVAL_NOTIFIERS
from notifications.services.attendance import send_attendance_status_notifications
from notifications.services.delivery import get_gateway
from notifications.services.recipients import clear_deactivated_tokens, resolve_staff
from notifications.services.reminders import send_review_deadline_reminders
from notifications.services.status import notify_review_status_changes

logger = logging.getLogger(__name__)

_pass_lock = threading.Lock()


@dataclass
class PassReport:
    started_at: object = field(default_factory=timezone.now)
    tokens_cleared: int = 0
    results: list = field(default_factory=list)
    errors: dict = field(default_factory=dict)

    @property
    def pending(self):
        return sum(result.pending for result in self.results)

    @property
    def sent(self):
        return sum(result.sent for result in self.results)

    def summary(self):
        parts = [
            f"{result.name}: pending={result.pending} sent={result.sent}"
            for result in self.results
            if result.pending or result.sent
        ]
        parts.extend(f"{name}: ERROR" for name in self.errors)
        return " | ".join(parts) or "nothing pending"


def get_collectors():
    """
    (name, callable) pairs in pass order. Each callable accepts
    `gateway`, `resolver` and `today` keyword arguments and returns a
    CollectorResult.
    """
    collectors = [(notifier.name, notifier.run) for notifier in APPROVAL_NOTIFIERS]
    collectors += [
        ("attendance_status", send_attendance_status_notifications),
        ("review_status", notify_review_status_changes),
        ("review_deadlines", send_review_deadline_reminders),
    ]
    return collectors


def is_pass_running():
    return _pass_lock.locked()


def run_pass(*, gateway=None, resolver=resolve_staff, today=None, collectors=None):
    """
    Run one full pass. Returns a PassReport, or None when another pass
    is still running.
    """
    if not _pass_lock.acquire(blocking=False):
        logger.warning("Previous dispatcher pass still running, skipping this tick")
        return None

    try:
        gateway = gateway or get_gateway()
        report = PassReport()

        # --------------------------------------------
        # HOUSEKEEPING
        # --------------------------------------------
        try:
            report.tokens_cleared = clear_deactivated_tokens()
        except Exception as exc:
            logger.exception("Clearing deactivated staff tokens failed")
            report.errors["token_housekeeping"] = str(exc)
        else:
            if report.tokens_cleared:
                logger.info(
                    "Cleared delivery token for %s deactivated staff",
                    report.tokens_cleared,
                )

        # --------------------------------------------
        # COLLECTORS (ISOLATED)
        # --------------------------------------------
        for name, collector in collectors or get_collectors():
            try:
                result = collector(gateway=gateway, resolver=resolver, today=today)
            except Exception as exc:
                logger.exception("Collector %s failed, continuing with the rest", name)
                report.errors[name] = str(exc)
                continue

            report.results.append(result)

        return report

    finally:
        _pass_lock.release()
