"""Lookup use-cases used to drive report filters (groups, projects, lots, search)."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from ..domain_errors import not_found_error, validation_error
from ..models import Group, Project, QuantitySheet
from ..schemas import CatchSearchResponse, CatchSearchResult, GroupResponse, ProjectBrief
from .report_filters import validate_pagination

_SEARCH_COLUMNS: tuple[tuple[str, str], ...] = (
    ("CatchNo", "catch_no"),
    ("Subject", "subject"),
    ("Course", "course"),
    ("Paper", "paper"),
)


def list_groups_use_case(*, db: Session) -> list[GroupResponse]:
    groups = db.query(Group).order_by(Group.id.asc()).all()
    if not groups:
        raise not_found_error("GROUPS_NOT_FOUND", "No groups found.")
    return [GroupResponse.model_validate(group) for group in groups]


def list_projects_by_group_use_case(*, db: Session, group_id: int) -> list[ProjectBrief]:
    projects = (
        db.query(Project)
        .filter(Project.group_id == group_id)
        .order_by(Project.project_id.asc())
        .all()
    )
    if not projects:
        raise not_found_error("PROJECTS_NOT_FOUND", "No projects found for the given GroupId.")
    return [ProjectBrief.model_validate(project) for project in projects]


def list_lot_numbers_use_case(*, db: Session, project_id: int) -> list[str]:
    rows = (
        db.query(QuantitySheet.lot_no)
        .filter(
            QuantitySheet.project_id == project_id,
            QuantitySheet.lot_no.isnot(None),
            QuantitySheet.lot_no != "",
        )
        .order_by(QuantitySheet.quantitysheet_id.asc())
        .all()
    )
    lot_nos = list(dict.fromkeys(row[0] for row in rows))
    if not lot_nos:
        raise not_found_error("LOTS_NOT_FOUND", "No LotNos found for the given ProjectId.")
    return lot_nos


def _match(catch: QuantitySheet, query: str) -> tuple[str, Optional[str]]:
    for label, attribute in _SEARCH_COLUMNS:
        value = getattr(catch, attribute)
        if value is not None and value.startswith(query):
            return label, value
    # Case-insensitive collations can select rows no column matches exactly.
    return "Paper", catch.paper


def search_catches_use_case(
    *,
    db: Session,
    query: str,
    page: int = 1,
    page_size: int = 5,
    group_id: Optional[int] = None,
    project_id: Optional[int] = None,
) -> CatchSearchResponse:
    """Prefix search over catch number, subject, course and paper."""
    if query is None or not query.strip():
        raise validation_error("SEARCH_QUERY_REQUIRED", "Search query cannot be empty.")
    page_size = validate_pagination(page=page, page_size=page_size)

    catches = db.query(QuantitySheet)
    if group_id is not None:
        projects_in_group = select(Project.project_id).where(Project.group_id == group_id)
        catches = catches.filter(QuantitySheet.project_id.in_(projects_in_group))
    if project_id is not None:
        catches = catches.filter(QuantitySheet.project_id == project_id)

    catches = catches.filter(
        or_(
            QuantitySheet.catch_no.startswith(query, autoescape=True),
            QuantitySheet.subject.startswith(query, autoescape=True),
            QuantitySheet.course.startswith(query, autoescape=True),
            and_(QuantitySheet.paper.isnot(None), QuantitySheet.paper.startswith(query, autoescape=True)),
        )
    )

    total_records = catches.count()
    rows = (
        catches.order_by(QuantitySheet.quantitysheet_id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    results: list[CatchSearchResult] = []
    for catch in rows:
        matched_column, matched_value = _match(catch, query)
        results.append(
            CatchSearchResult(
                catch_no=catch.catch_no,
                matched_column=matched_column,
                matched_value=matched_value,
                project_id=catch.project_id,
                lot_no=catch.lot_no,
            )
        )
    return CatchSearchResponse(total_records=total_records, results=results)
