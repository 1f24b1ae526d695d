"""
Notification dispatcher service layer.

Each module owns one concern of a pass:

- ledger / guard / grouping: the idempotency machinery
- approvals / attendance / status / reminders: event-source collectors
- recipients / delivery: who to push to and how
- dispatcher: one full pass over all collectors
"""

# =====================================================
# PASS
# =====================================================
from .dispatcher import (
    PassReport,
    get_collectors,
    run_pass,
)

# =====================================================
# COLLECTORS
# =====================================================
from .approvals import (
    APPROVAL_NOTIFIERS,
    ApprovalNotifier,
)
from .attendance import (
    send_attendance_status_notifications,
)
from .status import (
    notify_review_status_changes,
)
from .reminders import (
    send_review_deadline_reminders,
)

# =====================================================
# IDEMPOTENCY
# =====================================================
from .guard import (
    NotificationUnit,
    fan_out,
    try_send,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    # Pass
    "PassReport",
    "get_collectors",
    "run_pass",

    # Collectors
    "APPROVAL_NOTIFIERS",
    "ApprovalNotifier",
    "send_attendance_status_notifications",
    "notify_review_status_changes",
    "send_review_deadline_reminders",

    # Idempotency
    "NotificationUnit",
    "fan_out",
    "try_send",
]
