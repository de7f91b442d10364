"""Catch-level report use-cases: status rows, catch numbers and process-wise timeline."""
from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..config import settings
from ..domain_errors import not_found_error
from ..models import EventLog, QuantitySheet
from ..schemas import (
    CatchNumbersResponse,
    CatchReportItem,
    ProductionEventResponse,
    TimelineProcessResponse,
    TransactionDataResponse,
)
from ..services.catch_status import derive_catch_progress, has_terminal_transaction
from ..services.process_timeline import build_process_timeline
from ..services.transaction_summary import summarize_transactions
from .fetch_plans import CatchReportBundle, load_catch_report_bundle, load_timeline_bundle

logger = logging.getLogger(__name__)

DISPATCH_DATE_MISSING = "Not Available"


def _dispatch_date(bundle: CatchReportBundle, project_id: int, lot_no: str | None) -> str:
    entry = next(
        (d for d in bundle.dispatches if d.project_id == project_id and d.lot_no == lot_no),
        None,
    )
    if entry is None or entry.updated_at is None:
        return DISPATCH_DATE_MISSING
    return entry.updated_at.strftime("%Y-%m-%d")


def build_catch_report_items(bundle: CatchReportBundle) -> list[CatchReportItem]:
    """Map every catch of the bundle to its status row."""
    registries = bundle.registries
    process_names = registries.process_names()
    zones = registries.zones_by_id()
    teams = registries.teams_by_id()
    users = registries.users_by_id()
    machines = registries.machines_by_id()

    transactions_by_catch: dict[int, list] = defaultdict(list)
    for txn in bundle.transactions:
        transactions_by_catch[txn.quantitysheet_id].append(txn)

    items: list[CatchReportItem] = []
    for catch in bundle.catches:
        related = transactions_by_catch.get(catch.quantitysheet_id, [])
        progress = derive_catch_progress(
            related,
            process_names,
            terminal_process_id=settings.TERMINAL_PROCESS_ID,
            completed_status=settings.COMPLETED_STATUS_CODE,
        )
        summary = summarize_transactions(
            related,
            zones=zones,
            teams=teams,
            users=users,
            machines=machines,
        )
        process_names_for_catch = None
        if catch.process_ids is not None:
            applicable = set(catch.process_ids)
            process_names_for_catch = [p.name for p in registries.processes if p.id in applicable]

        items.append(
            CatchReportItem(
                catch_no=catch.catch_no,
                paper=catch.paper,
                exam_date=catch.exam_date,
                exam_time=catch.exam_time,
                course=catch.course,
                subject=catch.subject,
                inner_envelope=catch.inner_envelope,
                outer_envelope=catch.outer_envelope,
                lot_no=catch.lot_no,
                quantity=int(catch.quantity or 0),
                pages=catch.pages,
                status=catch.status,
                process_names=process_names_for_catch,
                catch_status=progress.status.value,
                terminal_process_seen=has_terminal_transaction(
                    related, terminal_process_id=settings.TERMINAL_PROCESS_ID
                ),
                current_process_name=progress.current_process_name,
                dispatch_date=_dispatch_date(bundle, catch.project_id, catch.lot_no),
                transaction_data=TransactionDataResponse.model_validate(summary, from_attributes=True),
            )
        )
    return items


def list_catches_by_lot_use_case(*, db: Session, project_id: int, lot_no: str) -> list[CatchReportItem]:
    """Status rows for every catch of a project lot."""
    catches = (
        db.query(QuantitySheet)
        .filter(QuantitySheet.project_id == project_id, QuantitySheet.lot_no == lot_no)
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .all()
    )
    if not catches:
        raise not_found_error("CATCHES_NOT_FOUND", "No data found for the given ProjectId and LotNo.")

    bundle = load_catch_report_bundle(db, catches=catches, project_id=project_id, lot_no=lot_no)
    items = build_catch_report_items(bundle)
    logger.info("reports.catches_by_lot project=%s lot=%s catches=%d", project_id, lot_no, len(items))
    return items


def list_catches_by_catch_no_use_case(*, db: Session, project_id: int, catch_no: str) -> list[CatchReportItem]:
    """Status rows for the catches carrying `catch_no` within a project."""
    catches = (
        db.query(QuantitySheet)
        .filter(QuantitySheet.project_id == project_id, QuantitySheet.catch_no == catch_no)
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .all()
    )
    if not catches:
        raise not_found_error("CATCHES_NOT_FOUND", "No data found for the given CatchNo.")

    bundle = load_catch_report_bundle(db, catches=catches, project_id=project_id)
    return build_catch_report_items(bundle)


def get_catch_numbers_use_case(*, db: Session, project_id: int) -> CatchNumbersResponse:
    """Open catch numbers of a project plus production events mentioning the project id."""
    catch_numbers = [
        row[0]
        for row in db.query(QuantitySheet.catch_no)
        .filter(
            QuantitySheet.project_id == project_id,
            QuantitySheet.status == settings.OPEN_CATCH_STATUS,
        )
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .all()
    ]
    if not catch_numbers:
        raise not_found_error(
            "CATCHES_NOT_FOUND",
            "No records found with Status = 1 for the given ProjectId.",
        )

    needle = str(project_id)
    events = (
        db.query(EventLog)
        .filter(
            EventLog.category == settings.PRODUCTION_EVENT_CATEGORY,
            or_(EventLog.old_value.contains(needle), EventLog.new_value.contains(needle)),
        )
        .order_by(EventLog.event_id.asc())
        .all()
    )
    if not events:
        raise not_found_error("EVENT_LOGS_NOT_FOUND", "No event logs found for the given ProjectId.")

    return CatchNumbersResponse(
        catch_numbers=catch_numbers,
        events=[ProductionEventResponse.model_validate(event) for event in events],
    )


def get_process_wise_use_case(*, db: Session, catch_no: str) -> list[TimelineProcessResponse]:
    """Process-by-process execution timeline for the first catch with this number."""
    catch = (
        db.query(QuantitySheet)
        .filter(QuantitySheet.catch_no == catch_no)
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .first()
    )
    if catch is None:
        raise not_found_error("CATCH_NOT_FOUND", "No data found for the given CatchNo.")

    bundle = load_timeline_bundle(db, catch=catch)
    timeline = build_process_timeline(
        transactions=bundle.transactions,
        project_processes=bundle.project_processes,
        event_logs=bundle.event_logs,
        zones=bundle.registries.zones_by_id(),
        users=bundle.registries.users,
        machines=bundle.registries.machines_by_id(),
        status_event=settings.STATUS_UPDATED_EVENT,
    )
    logger.info("reports.process_wise catch=%s processes=%d", catch_no, len(timeline))
    return [TimelineProcessResponse.model_validate(entry, from_attributes=True) for entry in timeline]
