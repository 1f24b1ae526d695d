"""
Idempotency ledger access.

All reads and writes of NotificationMarker go through here. Writes are
narrow: new rows are inserted with ignore_conflicts, and the only
update touches the `value` column of one last-notified-value row.
"""

from django.db.models import Exists, OuterRef
from django.utils import timezone

from notifications.models import NotificationMarker


def markers_for(record_type, kind, discriminator=""):
    return NotificationMarker.objects.filter(
        record_type=record_type,
        kind=kind,
        discriminator=discriminator,
    )


def unmarked(queryset, *, record_type, kind, discriminator=""):
    """Narrow `queryset` to rows without the given marker."""
    marker = markers_for(record_type, kind, discriminator).filter(
        record_id=OuterRef("pk"),
    )
    return queryset.filter(~Exists(marker))


def is_marked(*, record_type, record_id, kind, discriminator=""):
    return markers_for(record_type, kind, discriminator).filter(
        record_id=record_id,
    ).exists()


def commit(*, record_type, record_ids, kind, discriminator=""):
    """
    Stamp the marker onto every record in `record_ids`.

    Rows that already exist are left alone, so committing the same
    group twice is harmless.
    """
    now = timezone.now()
    NotificationMarker.objects.bulk_create(
        [
            NotificationMarker(
                record_type=record_type,
                record_id=record_id,
                kind=kind,
                discriminator=discriminator,
                sent_at=now,
            )
            for record_id in set(record_ids)
        ],
        ignore_conflicts=True,
    )


# ============================================================
# LAST-NOTIFIED-VALUE MARKERS
# ============================================================

def unnotified_value(queryset, *, record_type, kind, field):
    """
    Narrow `queryset` to rows whose current `field` differs from the
    last value notified for them (or that were never notified).
    """
    marker = markers_for(record_type, kind).filter(
        record_id=OuterRef("pk"),
        value=OuterRef(field),
    )
    return queryset.filter(~Exists(marker))


def advance_value(*, record_type, record_id, kind, value):
    NotificationMarker.objects.update_or_create(
        record_type=record_type,
        record_id=record_id,
        kind=kind,
        discriminator="",
        defaults={
            "value": value,
            "sent_at": timezone.now(),
        },
    )
