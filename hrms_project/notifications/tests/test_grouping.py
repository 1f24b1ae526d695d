from datetime import datetime
from types import SimpleNamespace

from notifications.services.grouping import group_records, latest_updated


def row(pk, employee, day, updated_hour):
    return SimpleNamespace(
        pk=pk,
        employee_id=employee,
        date=day,
        updated_at=datetime(2025, 3, 5, updated_hour),
    )


def test_group_records_keeps_first_seen_order():
    rows = [row(1, 7, "d1", 9), row(2, 8, "d1", 9), row(3, 7, "d1", 10)]

    groups = group_records(rows, key=lambda r: (r.employee_id, r.date))

    assert [group.key for group in groups] == [(7, "d1"), (8, "d1")]
    assert groups[0].member_ids == [1, 3]
    assert groups[0].representative.pk == 1


def test_group_records_custom_representative():
    rows = [row(1, 7, "d1", 11), row(2, 7, "d1", 9), row(3, 7, "d1", 10)]

    [group] = group_records(
        rows,
        key=lambda r: (r.employee_id, r.date),
        pick_representative=latest_updated,
    )

    assert group.representative.pk == 1


def test_latest_updated_breaks_ties_by_pk():
    rows = [row(4, 7, "d1", 9), row(9, 7, "d1", 9)]

    assert latest_updated(rows).pk == 9


def test_group_records_empty():
    assert group_records([], key=lambda r: r) == []
