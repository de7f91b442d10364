"""Production report endpoints (read-only)."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas import (
    CatchNumbersResponse,
    CatchReportItem,
    CatchSearchResponse,
    DailyProductionRow,
    DailyProductionSummary,
    GroupResponse,
    ProjectBrief,
    QuickCompletionResponse,
    TimelineProcessResponse,
    UnderProductionRow,
)
from ..use_cases.catch_reports import (
    get_catch_numbers_use_case,
    get_process_wise_use_case,
    list_catches_by_catch_no_use_case,
    list_catches_by_lot_use_case,
)
from ..use_cases.directory import (
    list_groups_use_case,
    list_lot_numbers_use_case,
    list_projects_by_group_use_case,
    search_catches_use_case,
)
from ..use_cases.production_volume import (
    daily_production_report_use_case,
    daily_production_summary_use_case,
)
from ..use_cases.quick_completion import quick_completion_use_case
from ..use_cases.under_production import under_production_use_case

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/groups", response_model=list[GroupResponse])
def list_groups(db: Session = Depends(get_db)):
    return list_groups_use_case(db=db)


@router.get("/groups/{group_id}/projects", response_model=list[ProjectBrief])
def list_projects_by_group(group_id: int, db: Session = Depends(get_db)):
    return list_projects_by_group_use_case(db=db, group_id=group_id)


@router.get("/projects/{project_id}/lots", response_model=list[str])
def list_lot_numbers(project_id: int, db: Session = Depends(get_db)):
    return list_lot_numbers_use_case(db=db, project_id=project_id)


@router.get("/projects/{project_id}/lots/{lot_no}/catches", response_model=list[CatchReportItem])
def list_catches_by_lot(project_id: int, lot_no: str, db: Session = Depends(get_db)):
    """Catches of a lot with derived status, current process and dispatch date."""
    return list_catches_by_lot_use_case(db=db, project_id=project_id, lot_no=lot_no)


@router.get("/projects/{project_id}/catches/{catch_no}", response_model=list[CatchReportItem])
def list_catches_by_catch_no(project_id: int, catch_no: str, db: Session = Depends(get_db)):
    return list_catches_by_catch_no_use_case(db=db, project_id=project_id, catch_no=catch_no)


@router.get("/projects/{project_id}/catch-numbers", response_model=CatchNumbersResponse)
def get_catch_numbers(project_id: int, db: Session = Depends(get_db)):
    return get_catch_numbers_use_case(db=db, project_id=project_id)


@router.get("/search", response_model=CatchSearchResponse)
def search_catches(
    query: str = "",
    page: int = 1,
    page_size: int = Query(settings.SEARCH_PAGE_SIZE, alias="pageSize"),
    group_id: Optional[int] = Query(None, alias="groupId"),
    project_id: Optional[int] = Query(None, alias="projectId"),
    db: Session = Depends(get_db),
):
    """Prefix search over catch number, subject, course and paper."""
    return search_catches_use_case(
        db=db,
        query=query,
        page=page,
        page_size=page_size,
        group_id=group_id,
        project_id=project_id,
    )


@router.get("/process-wise/{catch_no}", response_model=list[TimelineProcessResponse])
def get_process_wise(catch_no: str, db: Session = Depends(get_db)):
    """Per-process execution timeline, in the project's process sequence."""
    return get_process_wise_use_case(db=db, catch_no=catch_no)


@router.get("/daily-production", response_model=list[DailyProductionRow])
def get_daily_production(
    date: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """Completed volume per lot. Dates use dd-MM-yyyy; no dates means full history."""
    return daily_production_report_use_case(
        db=db,
        date_value=date,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/daily-production/summary", response_model=DailyProductionSummary)
def get_daily_production_summary(
    date: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    return daily_production_summary_use_case(
        db=db,
        date_value=date,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/quick-completion", response_model=QuickCompletionResponse)
def get_quick_completion(
    date: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
):
    """Status events of the same transaction logged within minutes of each other."""
    return quick_completion_use_case(
        db=db,
        date_value=date,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )


@router.get("/under-production", response_model=list[UnderProductionRow])
def get_under_production(db: Session = Depends(get_db)):
    """Lots with open catches that have no dispatch record."""
    return under_production_use_case(db=db)
