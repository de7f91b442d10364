"""Pydantic schemas for API."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


# Directory schemas
class GroupResponse(BaseModel):
    id: int
    name: str
    status: Optional[bool] = None
    model_config = ConfigDict(from_attributes=True)


class ProjectBrief(BaseModel):
    project_id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class CatchSearchResult(BaseModel):
    catch_no: str
    matched_column: str
    matched_value: Optional[str] = None
    project_id: int
    lot_no: Optional[str] = None


class CatchSearchResponse(BaseModel):
    total_records: int
    results: list[CatchSearchResult] = Field(default_factory=list)


# Catch report schemas
class TeamDetailResponse(BaseModel):
    team_name: str
    user_names: list[str] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class TransactionDataResponse(BaseModel):
    zone_descriptions: list[str] = Field(default_factory=list)
    team_details: list[TeamDetailResponse] = Field(default_factory=list)
    machine_names: list[str] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class CatchReportItem(BaseModel):
    """Catch row with derived lifecycle status and attribution."""
    catch_no: str
    paper: Optional[str] = None
    exam_date: Optional[str] = None
    exam_time: Optional[str] = None
    course: Optional[str] = None
    subject: Optional[str] = None
    inner_envelope: Optional[str] = None
    outer_envelope: Optional[str] = None
    lot_no: Optional[str] = None
    quantity: int
    pages: Optional[int] = None
    status: int
    process_names: Optional[list[str]] = None
    catch_status: str
    terminal_process_seen: bool
    current_process_name: Optional[str] = None
    dispatch_date: str
    transaction_data: TransactionDataResponse


class ProductionEventResponse(BaseModel):
    new_value: Optional[str] = None
    logged_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CatchNumbersResponse(BaseModel):
    catch_numbers: list[str] = Field(default_factory=list)
    events: list[ProductionEventResponse] = Field(default_factory=list)


# Process-wise timeline
class TimelineTransactionResponse(BaseModel):
    transaction_id: int
    zone_name: Optional[str] = None
    team_members: list[str] = Field(default_factory=list)
    supervisor: Optional[str] = None
    machine_name: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class TimelineProcessResponse(BaseModel):
    process_id: int
    transactions: list[TimelineTransactionResponse] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


# Production volume
class DailyProductionRow(BaseModel):
    """Lot-group volume row.

    `exam_to` carries the EARLIEST exam date and `exam_from` the LATEST one;
    the swapped naming is part of the report contract.
    """
    group_name: str
    project_id: int
    type_id: Optional[int] = None
    lot_no: Optional[str] = None
    exam_to: Optional[str] = None
    exam_from: Optional[str] = None
    count_of_catches: int
    total_quantity: int


class DailyProductionSummary(BaseModel):
    total_groups: int
    total_lots: int
    total_count_of_catches: int
    total_projects: int
    total_quantity: int
    model_config = ConfigDict(from_attributes=True)


# Quick completion
class QuickCompletionItem(BaseModel):
    event_id_a: int
    event_id_b: int
    event_a: str
    event_b: str
    transaction_id: Optional[int] = None
    project_id: Optional[int] = None
    group_id: Optional[int] = None
    quantitysheet_id: Optional[int] = None
    catch_no: Optional[str] = None
    quantity: Optional[int] = None
    logged_at_a: datetime
    logged_at_b: datetime
    triggered_by_a: Optional[int] = None
    triggered_by_b: Optional[int] = None
    time_difference_minutes: int
    model_config = ConfigDict(from_attributes=True)


class QuickCompletionResponse(BaseModel):
    start_date: str
    end_date: str
    page: int
    page_size: int
    total_items: int
    total_pages: int
    items: list[QuickCompletionItem] = Field(default_factory=list)


# Under production
class UnderProductionRow(BaseModel):
    project_id: int
    name: str
    group_id: Optional[int] = None
    from_date: datetime
    to_date: datetime
    type_id: Optional[int] = None
    lot_no: Optional[str] = None
    total_catch_no: int
    total_quantity: int
    model_config = ConfigDict(from_attributes=True)
