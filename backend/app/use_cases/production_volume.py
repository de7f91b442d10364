"""Daily production (completed volume) report use-cases."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..schemas import DailyProductionRow, DailyProductionSummary
from ..services.production_volume import aggregate_lot_volumes, summarize_lot_volumes
from .fetch_plans import load_volume_bundle
from .report_filters import format_report_date, resolve_production_window

logger = logging.getLogger(__name__)


def daily_production_report_use_case(
    *,
    db: Session,
    date_value: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[DailyProductionRow]:
    """Completed volume per (project, type, group, lot) within the window."""
    window = resolve_production_window(date_value=date_value, start_date=start_date, end_date=end_date)
    bundle = load_volume_bundle(db, window=window)

    volumes = aggregate_lot_volumes(
        bundle.transactions,
        bundle.projects,
        bundle.catches,
        bundle.group_names(),
    )
    logger.info(
        "reports.daily_production window=%s rows=%d",
        f"{window.first_day}..{window.last_day}" if window else "all",
        len(volumes),
    )
    return [
        DailyProductionRow(
            group_name=volume.group_name,
            project_id=volume.project_id,
            type_id=volume.type_id,
            lot_no=volume.lot_no,
            exam_to=format_report_date(volume.exam_to),
            exam_from=format_report_date(volume.exam_from),
            count_of_catches=volume.count_of_catches,
            total_quantity=volume.total_quantity,
        )
        for volume in volumes
    ]


def daily_production_summary_use_case(
    *,
    db: Session,
    date_value: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> DailyProductionSummary:
    window = resolve_production_window(date_value=date_value, start_date=start_date, end_date=end_date)
    bundle = load_volume_bundle(db, window=window)
    summary = summarize_lot_volumes(bundle.transactions, bundle.projects, bundle.catches)
    return DailyProductionSummary.model_validate(summary, from_attributes=True)
