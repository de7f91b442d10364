"""Quick-completion report: status events on one transaction logged minutes apart."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..schemas import QuickCompletionItem, QuickCompletionResponse
from ..services.quick_completion import correlate_quick_completions, enrich_status_events, paginate
from .fetch_plans import load_status_event_bundle
from .report_filters import format_report_date, resolve_required_window, validate_pagination

logger = logging.getLogger(__name__)


def quick_completion_use_case(
    *,
    db: Session,
    date_value: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> QuickCompletionResponse:
    window = resolve_required_window(date_value=date_value, start_date=start_date, end_date=end_date)
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    page_size = validate_pagination(page=page, page_size=page_size)

    bundle = load_status_event_bundle(db, window=window)
    events = enrich_status_events(bundle.logs, bundle.transactions, bundle.catches, bundle.projects)
    pairs = correlate_quick_completions(events, window_minutes=settings.QUICK_COMPLETION_WINDOW_MINUTES)
    result = paginate(pairs, page=page, page_size=page_size)

    logger.info(
        "reports.quick_completion window=%s..%s events=%d pairs=%d",
        window.first_day,
        window.last_day,
        len(events),
        result.total_items,
    )
    return QuickCompletionResponse(
        start_date=format_report_date(window.first_day),
        end_date=format_report_date(window.last_day),
        page=result.page,
        page_size=result.page_size,
        total_items=result.total_items,
        total_pages=result.total_pages,
        items=[QuickCompletionItem.model_validate(pair) for pair in result.items],
    )
