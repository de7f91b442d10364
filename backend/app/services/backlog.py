"""Under-production backlog: open lots that have not been dispatched."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from .exam_dates import parse_exam_date

# Substituted for exam dates that cannot be parsed (they are not excluded here).
UNPARSED_EXAM_DATE = datetime.min

LotKey = tuple[int, Optional[str]]


@dataclass(frozen=True)
class LotBacklog:
    project_id: int
    name: str
    group_id: Optional[int]
    type_id: Optional[int]
    lot_no: Optional[str]
    from_date: datetime
    to_date: datetime
    total_catch_no: int
    total_quantity: int


@dataclass
class _LotTotals:
    catch_ids: list[int]
    total_quantity: int
    exam_dates: list[datetime]


def dispatched_lot_keys(dispatches: Iterable[object]) -> set[LotKey]:
    return {(d.project_id, d.lot_no) for d in dispatches}


def _lot_totals(open_catches: Sequence[object]) -> dict[LotKey, _LotTotals]:
    totals: dict[LotKey, _LotTotals] = {}
    seen: set[int] = set()
    for catch in open_catches:
        if catch.quantitysheet_id in seen:
            continue
        seen.add(catch.quantitysheet_id)

        key = (catch.project_id, catch.lot_no)
        lot = totals.setdefault(key, _LotTotals(catch_ids=[], total_quantity=0, exam_dates=[]))
        lot.catch_ids.append(catch.quantitysheet_id)
        lot.total_quantity += int(catch.quantity or 0)
        lot.exam_dates.append(parse_exam_date(catch.exam_date) or UNPARSED_EXAM_DATE)
    return totals


def find_undispatched_lots(
    projects: Sequence[object],
    open_catches: Sequence[object],
    dispatches: Iterable[object],
) -> list[LotBacklog]:
    """Return every (project, lot) with open catches and no dispatch record.

    Rows follow project order, then the order in which each lot was first seen.
    """
    dispatched = dispatched_lot_keys(dispatches)
    lots_by_project: dict[int, list[tuple[LotKey, _LotTotals]]] = {}
    for key, lot in _lot_totals(open_catches).items():
        lots_by_project.setdefault(key[0], []).append((key, lot))

    backlog: list[LotBacklog] = []
    for project in projects:
        for key, lot in lots_by_project.get(project.project_id, []):
            if key in dispatched:
                continue
            backlog.append(
                LotBacklog(
                    project_id=project.project_id,
                    name=project.name,
                    group_id=project.group_id,
                    type_id=project.type_id,
                    lot_no=key[1],
                    from_date=min(lot.exam_dates),
                    to_date=max(lot.exam_dates),
                    total_catch_no=len(lot.catch_ids),
                    total_quantity=lot.total_quantity,
                )
            )
    return backlog
