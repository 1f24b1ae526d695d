"""
Reminder notification service layer.

Time-based reminder emitters triggered by the poll scheduler.

Reminder logic is:
- service-layer only
- date-based
- deduplicated through the marker ledger
"""

# =====================================================
# REVIEW CYCLE DEADLINES
# =====================================================
from .review_deadlines import (
    days_remaining,
    send_review_deadline_reminders,
)

__all__ = [
    "days_remaining",
    "send_review_deadline_reminders",
]
