"""Read-only fetch plans: one immutable input bundle per report request.

Each loader issues the minimal set of queries for its report and freezes the rows
into a bundle; the services then work purely in memory over that snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import (
    Dispatch,
    EventLog,
    Group,
    Machine,
    Process,
    ProcessTransaction,
    Project,
    ProjectProcess,
    QuantitySheet,
    Team,
    User,
    Zone,
)
from .report_filters import DateWindow


@dataclass(frozen=True)
class Registries:
    processes: tuple = ()
    zones: tuple = ()
    teams: tuple = ()
    users: tuple = ()
    machines: tuple = ()

    def process_names(self) -> dict[int, str]:
        return {p.id: p.name for p in self.processes}

    def zones_by_id(self) -> dict:
        return {z.zone_id: z for z in self.zones}

    def teams_by_id(self) -> dict:
        return {t.team_id: t for t in self.teams}

    def users_by_id(self) -> dict:
        return {u.user_id: u for u in self.users}

    def machines_by_id(self) -> dict:
        return {m.machine_id: m for m in self.machines}


@dataclass(frozen=True)
class CatchReportBundle:
    catches: tuple
    transactions: tuple
    dispatches: tuple
    registries: Registries


@dataclass(frozen=True)
class TimelineBundle:
    project_processes: tuple
    transactions: tuple
    event_logs: tuple
    registries: Registries


@dataclass(frozen=True)
class VolumeBundle:
    transactions: tuple
    catches: tuple
    projects: tuple
    groups: tuple

    def group_names(self) -> dict[int, str]:
        return {g.id: g.name for g in self.groups}


@dataclass(frozen=True)
class StatusEventBundle:
    logs: tuple
    transactions: tuple
    catches: tuple
    projects: tuple


@dataclass(frozen=True)
class BacklogBundle:
    projects: tuple
    open_catches: tuple
    dispatches: tuple


def _ids(values: Iterable[Optional[int]]) -> tuple:
    return tuple(dict.fromkeys(v for v in values if v is not None))


def load_registries(db: Session, *, include_teams: bool = True) -> Registries:
    return Registries(
        processes=tuple(db.query(Process).order_by(Process.id.asc()).all()),
        zones=tuple(db.query(Zone).order_by(Zone.zone_id.asc()).all()),
        teams=tuple(db.query(Team).order_by(Team.team_id.asc()).all()) if include_teams else (),
        users=tuple(db.query(User).order_by(User.user_id.asc()).all()),
        machines=tuple(db.query(Machine).order_by(Machine.machine_id.asc()).all()),
    )


def load_catch_report_bundle(
    db: Session,
    *,
    catches: list[QuantitySheet],
    project_id: int,
    lot_no: Optional[str] = None,
) -> CatchReportBundle:
    """Catches of one project; with `lot_no` the whole project's transactions are scanned."""
    if lot_no is not None:
        transactions = (
            db.query(ProcessTransaction)
            .filter(ProcessTransaction.project_id == project_id)
            .order_by(ProcessTransaction.transaction_id.asc())
            .all()
        )
        dispatches = (
            db.query(Dispatch)
            .filter(Dispatch.project_id == project_id, Dispatch.lot_no == lot_no)
            .order_by(Dispatch.id.asc())
            .all()
        )
    else:
        catch_ids = _ids(c.quantitysheet_id for c in catches)
        transactions = (
            db.query(ProcessTransaction)
            .filter(ProcessTransaction.quantitysheet_id.in_(catch_ids))
            .order_by(ProcessTransaction.transaction_id.asc())
            .all()
        )
        lot_nos = tuple(dict.fromkeys(c.lot_no for c in catches if c.lot_no is not None))
        dispatches = (
            db.query(Dispatch)
            .filter(Dispatch.project_id == project_id, Dispatch.lot_no.in_(lot_nos))
            .order_by(Dispatch.id.asc())
            .all()
        ) if lot_nos else []

    return CatchReportBundle(
        catches=tuple(catches),
        transactions=tuple(transactions),
        dispatches=tuple(dispatches),
        registries=load_registries(db),
    )


def load_timeline_bundle(db: Session, *, catch: QuantitySheet) -> TimelineBundle:
    project_processes = (
        db.query(ProjectProcess)
        .filter(ProjectProcess.project_id == catch.project_id)
        .order_by(ProjectProcess.sequence.asc())
        .all()
    )
    transactions = (
        db.query(ProcessTransaction)
        .filter(ProcessTransaction.quantitysheet_id == catch.quantitysheet_id)
        .order_by(ProcessTransaction.transaction_id.asc())
        .all()
    )
    transaction_ids = _ids(t.transaction_id for t in transactions)
    event_logs = (
        db.query(EventLog)
        .filter(EventLog.transaction_id.in_(transaction_ids))
        .order_by(EventLog.event_id.asc())
        .all()
    ) if transaction_ids else []

    return TimelineBundle(
        project_processes=tuple(project_processes),
        transactions=tuple(transactions),
        event_logs=tuple(event_logs),
        registries=load_registries(db, include_teams=False),
    )


def _apply_window(query, window: Optional[DateWindow]):
    if window is None:
        return query
    return query.filter(EventLog.logged_at >= window.start, EventLog.logged_at < window.end)


def _load_transaction_context(db: Session, transaction_ids: tuple) -> tuple[list, list, list]:
    if not transaction_ids:
        return [], [], []
    transactions = (
        db.query(ProcessTransaction)
        .filter(ProcessTransaction.transaction_id.in_(transaction_ids))
        .order_by(ProcessTransaction.transaction_id.asc())
        .all()
    )
    catch_ids = _ids(t.quantitysheet_id for t in transactions)
    catches = (
        db.query(QuantitySheet).filter(QuantitySheet.quantitysheet_id.in_(catch_ids)).all()
    ) if catch_ids else []
    project_ids = _ids(t.project_id for t in transactions)
    projects = (
        db.query(Project).filter(Project.project_id.in_(project_ids)).all()
    ) if project_ids else []
    return transactions, catches, projects


def load_volume_bundle(db: Session, *, window: Optional[DateWindow]) -> VolumeBundle:
    """Transactions completed (status event with the completed code) inside the window."""
    log_query = db.query(EventLog.transaction_id).filter(
        EventLog.event == settings.STATUS_UPDATED_EVENT,
        EventLog.new_value == str(settings.COMPLETED_STATUS_CODE),
        EventLog.transaction_id.isnot(None),
    )
    transaction_ids = _ids(row[0] for row in _apply_window(log_query, window).distinct().all())

    transactions, catches, projects = _load_transaction_context(db, transaction_ids)
    group_ids = _ids(p.group_id for p in projects)
    groups = db.query(Group).filter(Group.id.in_(group_ids)).all() if group_ids else []

    return VolumeBundle(
        transactions=tuple(transactions),
        catches=tuple(catches),
        projects=tuple(projects),
        groups=tuple(groups),
    )


def load_status_event_bundle(db: Session, *, window: DateWindow) -> StatusEventBundle:
    logs = (
        _apply_window(
            db.query(EventLog).filter(EventLog.event == settings.STATUS_UPDATED_EVENT),
            window,
        )
        .order_by(EventLog.event_id.asc())
        .all()
    )
    transactions, catches, projects = _load_transaction_context(
        db, _ids(log.transaction_id for log in logs)
    )
    return StatusEventBundle(
        logs=tuple(logs),
        transactions=tuple(transactions),
        catches=tuple(catches),
        projects=tuple(projects),
    )


def load_backlog_bundle(db: Session) -> BacklogBundle:
    projects = db.query(Project).order_by(Project.project_id.asc()).all()
    open_catches = (
        db.query(QuantitySheet)
        .filter(QuantitySheet.status == settings.OPEN_CATCH_STATUS)
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .all()
    )
    dispatches = db.query(Dispatch).all()
    return BacklogBundle(
        projects=tuple(projects),
        open_catches=tuple(open_catches),
        dispatches=tuple(dispatches),
    )
