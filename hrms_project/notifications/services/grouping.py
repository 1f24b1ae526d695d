"""
Grouping layer.

Collapses raw records that stand for one notifiable occurrence into a
single RecordGroup. The group keeps every member so a successful send
can mark all of them.
"""

from dataclasses import dataclass


@dataclass
class RecordGroup:
    key: object
    members: list
    representative: object

    @property
    def member_ids(self):
        return [member.pk for member in self.members]


def group_records(records, key, pick_representative=None):
    """
    Bucket `records` by `key(record)`, keeping first-seen order.

    The representative defaults to the first member of each bucket.
    """
    buckets = {}

    for record in records:
        buckets.setdefault(key(record), []).append(record)

    groups = []
    for group_key, members in buckets.items():
        representative = (
            pick_representative(members)
            if pick_representative
            else members[0]
        )
        groups.append(
            RecordGroup(
                key=group_key,
                members=members,
                representative=representative,
            )
        )

    return groups


def latest_updated(members):
    return max(members, key=lambda record: (record.updated_at, record.pk))
