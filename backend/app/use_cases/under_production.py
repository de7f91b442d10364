"""Under-production report: lots with open catches and no dispatch record."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ..schemas import UnderProductionRow
from ..services.backlog import find_undispatched_lots
from .fetch_plans import load_backlog_bundle

logger = logging.getLogger(__name__)


def under_production_use_case(*, db: Session) -> list[UnderProductionRow]:
    bundle = load_backlog_bundle(db)
    backlog = find_undispatched_lots(bundle.projects, bundle.open_catches, bundle.dispatches)
    logger.info(
        "reports.under_production open_catches=%d lots=%d",
        len(bundle.open_catches),
        len(backlog),
    )
    return [UnderProductionRow.model_validate(lot) for lot in backlog]
