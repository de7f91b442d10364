from datetime import datetime
from types import SimpleNamespace

from app.services.backlog import (
    UNPARSED_EXAM_DATE,
    dispatched_lot_keys,
    find_undispatched_lots,
)

PROJECTS = [
    SimpleNamespace(project_id=1, name="Semester Exams", group_id=10, type_id=1),
    SimpleNamespace(project_id=2, name="Board Papers", group_id=20, type_id=2),
]


def _catch(quantitysheet_id, project_id, lot_no, quantity, exam_date):
    return SimpleNamespace(
        quantitysheet_id=quantitysheet_id,
        project_id=project_id,
        lot_no=lot_no,
        quantity=quantity,
        exam_date=exam_date,
    )


def _dispatch(project_id, lot_no):
    return SimpleNamespace(project_id=project_id, lot_no=lot_no)


def test_open_lot_without_dispatch_is_reported_until_dispatched() -> None:
    catches = [_catch(1, 1, "L1", 100, "05-03-2024")]

    rows = find_undispatched_lots(PROJECTS, catches, [])
    assert len(rows) == 1
    assert rows[0].lot_no == "L1"
    assert rows[0].name == "Semester Exams"
    assert rows[0].group_id == 10
    assert rows[0].type_id == 1

    assert find_undispatched_lots(PROJECTS, catches, [_dispatch(1, "L1")]) == []


def test_dispatch_key_is_project_and_lot() -> None:
    catches = [_catch(1, 1, "L1", 10, None), _catch(2, 2, "L1", 20, None)]

    rows = find_undispatched_lots(PROJECTS, catches, [_dispatch(2, "L1")])

    assert [(r.project_id, r.lot_no) for r in rows] == [(1, "L1")]
    assert dispatched_lot_keys([_dispatch(2, "L1")]) == {(2, "L1")}


def test_lot_totals_and_date_range() -> None:
    catches = [
        _catch(1, 1, "L1", 100, "05-03-2024"),
        _catch(2, 1, "L1", 50, "07-03-2024"),
        _catch(2, 1, "L1", 50, "07-03-2024"),  # duplicate row
    ]

    row = find_undispatched_lots(PROJECTS, catches, [])[0]

    assert row.total_catch_no == 2
    assert row.total_quantity == 150
    assert row.from_date == datetime(2024, 3, 5)
    assert row.to_date == datetime(2024, 3, 7)


def test_unparseable_exam_date_falls_back_to_minimum_sentinel() -> None:
    catches = [_catch(1, 1, "L1", 10, "TBD"), _catch(2, 1, "L1", 10, "07-03-2024")]

    row = find_undispatched_lots(PROJECTS, catches, [])[0]

    assert row.from_date == UNPARSED_EXAM_DATE == datetime.min
    assert row.to_date == datetime(2024, 3, 7)


def test_rows_follow_project_order_then_lot_first_seen() -> None:
    catches = [
        _catch(1, 2, "B", 1, None),
        _catch(2, 1, "L2", 1, None),
        _catch(3, 1, "L1", 1, None),
        _catch(4, 3, "X", 1, None),  # unknown project -> not reported
    ]

    rows = find_undispatched_lots(PROJECTS, catches, [])

    assert [(r.project_id, r.lot_no) for r in rows] == [(1, "L2"), (1, "L1"), (2, "B")]
