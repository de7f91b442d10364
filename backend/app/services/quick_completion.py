"""Near-duplicate status events ("quick completion") on the same transaction."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StatusEvent:
    """Status event left-joined to its transaction, catch and project (missing -> None)."""

    event_id: int
    event: str
    transaction_ref: Optional[int]
    logged_at: datetime
    triggered_by: Optional[int]
    transaction_id: Optional[int] = None
    quantitysheet_id: Optional[int] = None
    project_id: Optional[int] = None
    group_id: Optional[int] = None
    catch_no: Optional[str] = None
    quantity: Optional[int] = None


@dataclass(frozen=True)
class QuickCompletionPair:
    event_id_a: int
    event_id_b: int
    event_a: str
    event_b: str
    transaction_id: Optional[int]
    project_id: Optional[int]
    group_id: Optional[int]
    quantitysheet_id: Optional[int]
    catch_no: Optional[str]
    quantity: Optional[int]
    logged_at_a: datetime
    logged_at_b: datetime
    triggered_by_a: Optional[int]
    triggered_by_b: Optional[int]
    time_difference_minutes: int


@dataclass(frozen=True)
class Page(Generic[T]):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    items: list[T] = field(default_factory=list)


def enrich_status_events(
    logs: Sequence[object],
    transactions: Sequence[object],
    catches: Sequence[object],
    projects: Sequence[object],
) -> list[StatusEvent]:
    transactions_by_id = {t.transaction_id: t for t in transactions}
    catches_by_id = {c.quantitysheet_id: c for c in catches}
    projects_by_id = {p.project_id: p for p in projects}

    events: list[StatusEvent] = []
    for log in logs:
        txn = transactions_by_id.get(log.transaction_id)
        catch = catches_by_id.get(txn.quantitysheet_id) if txn is not None else None
        project = projects_by_id.get(txn.project_id) if txn is not None else None
        events.append(
            StatusEvent(
                event_id=log.event_id,
                event=log.event,
                transaction_ref=log.transaction_id,
                logged_at=log.logged_at,
                triggered_by=log.triggered_by,
                transaction_id=txn.transaction_id if txn is not None else None,
                quantitysheet_id=txn.quantitysheet_id if txn is not None else None,
                project_id=txn.project_id if txn is not None else None,
                group_id=project.group_id if project is not None else None,
                catch_no=catch.catch_no if catch is not None else None,
                quantity=catch.quantity if catch is not None else None,
            )
        )
    return events


def _sort_key(pair_and_ref: tuple[Optional[int], QuickCompletionPair]):
    ref, pair = pair_and_ref
    return (ref is not None, ref if ref is not None else 0, pair.logged_at_a)


def correlate_quick_completions(
    events: Sequence[StatusEvent],
    *,
    window_minutes: int,
) -> list[QuickCompletionPair]:
    """Pair distinct events of the same transaction logged less than `window_minutes` apart.

    Both orientations (a, b) and (b, a) are emitted. Events are bucketed by
    transaction first so pairing stays within a bucket. Rows are ordered by
    transaction id (missing ids first), then by the first event's timestamp.
    """
    window = timedelta(minutes=window_minutes)

    buckets: dict[Optional[int], list[StatusEvent]] = {}
    for event in events:
        buckets.setdefault(event.transaction_ref, []).append(event)

    matched: list[tuple[Optional[int], QuickCompletionPair]] = []
    for ref, bucket in buckets.items():
        for a in bucket:
            for b in bucket:
                if a.event_id == b.event_id:
                    continue
                delta = abs(a.logged_at - b.logged_at)
                if delta >= window:
                    continue
                matched.append(
                    (
                        ref,
                        QuickCompletionPair(
                            event_id_a=a.event_id,
                            event_id_b=b.event_id,
                            event_a=a.event,
                            event_b=b.event,
                            transaction_id=a.transaction_id,
                            project_id=a.project_id,
                            group_id=a.group_id,
                            quantitysheet_id=a.quantitysheet_id,
                            catch_no=a.catch_no,
                            quantity=a.quantity,
                            logged_at_a=a.logged_at,
                            logged_at_b=b.logged_at,
                            triggered_by_a=a.triggered_by,
                            triggered_by_b=b.triggered_by,
                            time_difference_minutes=int(delta.total_seconds() // 60),
                        ),
                    )
                )

    matched.sort(key=_sort_key)
    return [pair for _, pair in matched]


def paginate(items: Sequence[T], *, page: int, page_size: int) -> Page[T]:
    total = len(items)
    start = (page - 1) * page_size
    return Page(
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=math.ceil(total / page_size),
        items=list(items[start : start + page_size]),
    )
