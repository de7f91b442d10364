"""Production volume aggregation by (project, type, group, lot)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence

from .exam_dates import parse_exam_date

UNKNOWN_GROUP_NAME = "Unknown"


@dataclass(frozen=True)
class LotVolume:
    """One lot-group of completed production.

    The exam-date fields keep the report's historical naming: `exam_to` holds the
    EARLIEST parsed exam date and `exam_from` the LATEST.
    """

    group_name: str
    project_id: int
    type_id: Optional[int]
    group_id: Optional[int]
    lot_no: Optional[str]
    exam_to: Optional[datetime]
    exam_from: Optional[datetime]
    count_of_catches: int
    total_quantity: int


@dataclass(frozen=True)
class VolumeSummary:
    total_groups: int = 0
    total_lots: int = 0
    total_projects: int = 0
    total_count_of_catches: int = 0
    total_quantity: int = 0


def join_completed_rows(
    transactions: Sequence[object],
    projects: Sequence[object],
    catches: Sequence[object],
) -> list[tuple[object, object, object]]:
    """Inner-join transactions to their project and catch, keeping transaction order."""
    projects_by_id = {p.project_id: p for p in projects}
    catches_by_id = {c.quantitysheet_id: c for c in catches}

    rows: list[tuple[object, object, object]] = []
    for txn in transactions:
        project = projects_by_id.get(txn.project_id)
        catch = catches_by_id.get(txn.quantitysheet_id)
        if project is None or catch is None:
            continue
        rows.append((txn, project, catch))
    return rows


def _group_rows(rows: list[tuple[object, object, object]]) -> dict[tuple, list[tuple[object, object, object]]]:
    grouped: dict[tuple, list[tuple[object, object, object]]] = {}
    for txn, project, catch in rows:
        key = (txn.project_id, project.type_id, project.group_id, txn.lot_no)
        grouped.setdefault(key, []).append((txn, project, catch))
    return grouped


def aggregate_lot_volumes(
    transactions: Sequence[object],
    projects: Sequence[object],
    catches: Sequence[object],
    group_names: Mapping[int, str],
) -> list[LotVolume]:
    """Detail mode: one row per lot-group, in first-seen order.

    Unparseable exam dates are left out of the exam-date range only.
    """
    grouped = _group_rows(join_completed_rows(transactions, projects, catches))

    volumes: list[LotVolume] = []
    for (project_id, type_id, group_id, lot_no), members in grouped.items():
        exam_dates = [d for d in (parse_exam_date(catch.exam_date) for _, _, catch in members) if d is not None]
        volumes.append(
            LotVolume(
                group_name=group_names.get(group_id, UNKNOWN_GROUP_NAME),
                project_id=project_id,
                type_id=type_id,
                group_id=group_id,
                lot_no=lot_no,
                exam_to=min(exam_dates) if exam_dates else None,
                exam_from=max(exam_dates) if exam_dates else None,
                count_of_catches=len(members),
                total_quantity=sum(int(catch.quantity or 0) for _, _, catch in members),
            )
        )
    return volumes


def summarize_lot_volumes(
    transactions: Sequence[object],
    projects: Sequence[object],
    catches: Sequence[object],
) -> VolumeSummary:
    """Summary mode: scalar totals over the same lot-groups as detail mode."""
    grouped = _group_rows(join_completed_rows(transactions, projects, catches))
    keys = list(grouped.keys())
    return VolumeSummary(
        total_groups=len({group_id for _, _, group_id, _ in keys}),
        total_lots=len(keys),
        total_projects=len({project_id for project_id, _, _, _ in keys}),
        total_count_of_catches=sum(len(members) for members in grouped.values()),
        total_quantity=sum(
            int(catch.quantity or 0) for members in grouped.values() for _, _, catch in members
        ),
    )
