"""
Recipient resolution: staff identity -> delivery token.

A missing staff record or a blank token resolves to None. Callers treat
None as "skip for now", never as an error.
"""

from dataclasses import dataclass

from accounts.models import Staff, User


@dataclass(frozen=True)
class Recipient:
    staff_id: int
    name: str
    token: str


def _to_recipient(staff):
    token = (staff.fcm_token or "").strip()
    if not token:
        return None
    return Recipient(staff_id=staff.pk, name=staff.name, token=token)


def resolve_staff(staff_id):
    if staff_id is None:
        return None

    staff = (
        Staff.objects
        .filter(pk=staff_id)
        .only("id", "name", "fcm_token")
        .first()
    )
    if staff is None:
        return None

    return _to_recipient(staff)


def hr_staff_ids(company_id):
    """Staff linked to active HR/Admin users of a tenant."""
    return list(
        Staff.objects
        .filter(
            company_id=company_id,
            user__is_active=True,
            user__role__in=[User.Role.HR, User.Role.ADMIN],
        )
        .order_by("pk")
        .values_list("pk", flat=True)
    )


def clear_deactivated_tokens():
    """
    Drop delivery tokens still held by deactivated staff.

    Returns the number of staff rows updated. Only the token column is
    written.
    """
    return (
        Staff.objects
        .filter(status__iexact=Staff.Status.DEACTIVATED)
        .exclude(fcm_token="")
        .update(fcm_token="")
    )
