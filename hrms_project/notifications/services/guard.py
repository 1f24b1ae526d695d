"""
Idempotency guard.

The only place where a delivery attempt and a marker commit meet.
Markers are committed strictly after the gateway confirms delivery;
every other outcome leaves the ledger untouched so the next pass
retries the same unit.
"""

import logging
from dataclasses import dataclass, field

from notifications.services.recipients import resolve_staff

logger = logging.getLogger(__name__)


@dataclass
class NotificationUnit:
    """
    One logical notification for one recipient.

    `members` are the raw records the notification stands for; all of
    them are handed to the commit callback on success.
    """

    recipient_id: int
    title: str
    body: str
    data: dict = field(default_factory=dict)
    members: list = field(default_factory=list)


def deliver(unit, *, gateway, resolver=resolve_staff):
    """Resolve and push one unit. Returns True only on confirmed delivery."""
    recipient = resolver(unit.recipient_id)

    if recipient is None:
        logger.debug(
            "No delivery token for staff=%s, skipping %r",
            unit.recipient_id, unit.title,
        )
        return False

    try:
        result = gateway.send(recipient.token, unit.title, unit.body, unit.data)
    except Exception:
        logger.exception(
            "Gateway raised while sending %r to staff=%s",
            unit.title, unit.recipient_id,
        )
        return False

    if not result.success:
        logger.warning(
            "Delivery failed for staff=%s title=%r: %s",
            unit.recipient_id, unit.title, result.error or "unknown error",
        )
        return False

    return True


def try_send(unit, *, gateway, commit, resolver=resolve_staff):
    """
    Deliver `unit` and, on success, commit markers for all its members.
    """
    if not deliver(unit, gateway=gateway, resolver=resolver):
        return False

    commit(unit.members)
    return True


def fan_out(units, *, members, gateway, commit, resolver=resolve_staff):
    """
    Deliver the same occurrence to several recipients.

    `commit(members)` runs once, after the first confirmed delivery has
    happened. Returns the number of recipients reached.
    """
    delivered = 0

    for unit in units:
        if deliver(unit, gateway=gateway, resolver=resolver):
            delivered += 1

    if delivered:
        commit(members)

    return delivered
