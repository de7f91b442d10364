"""SQLAlchemy models for the production workflow entities read by the reports."""
from sqlalchemy import (
    Boolean, Column, String, Integer, DateTime, Text,
    ForeignKey, Index, JSON
)
from sqlalchemy.sql import func
from .database import Base


class Group(Base):
    """Customer/examination group owning projects."""
    __tablename__ = "groups"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    status = Column(Boolean, default=True)


class Project(Base):
    """Print project (one group, one project type)."""
    __tablename__ = "projects"
    
    project_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=True, index=True)
    type_id = Column(Integer, nullable=True)


class Process(Base):
    """Process definition (reference lookup)."""
    __tablename__ = "processes"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)


class ProjectProcess(Base):
    """Ordered workflow step of a project."""
    __tablename__ = "project_processes"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False, index=True)
    process_id = Column(Integer, ForeignKey("processes.id"), nullable=False)
    sequence = Column(Integer, nullable=False, default=0)


class QuantitySheet(Base):
    """Catch: one unit of production work tracked through the workflow."""
    __tablename__ = "quantity_sheets"
    
    quantitysheet_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False, index=True)
    lot_no = Column(String(50), nullable=True, index=True)
    catch_no = Column(String(100), nullable=False, index=True)
    paper = Column(String(255), nullable=True)
    course = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    exam_date = Column(String(50), nullable=True)  # free text, usually dd-MM-yyyy
    exam_time = Column(String(50), nullable=True)
    inner_envelope = Column(String(100), nullable=True)
    outer_envelope = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    pages = Column(Integer, nullable=True)
    # Applicable process ids; NULL when the workflow was never assigned.
    process_ids = Column(JSON, nullable=True)
    status = Column(Integer, nullable=False, default=1)
    
    __table_args__ = (
        Index('idx_quantity_sheets_project_lot', 'project_id', 'lot_no'),
    )


class ProcessTransaction(Base):
    """One execution attempt of a process against a catch."""
    __tablename__ = "transactions"
    
    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    quantitysheet_id = Column(Integer, ForeignKey("quantity_sheets.quantitysheet_id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False, index=True)
    lot_no = Column(String(50), nullable=True)
    process_id = Column(Integer, ForeignKey("processes.id"), nullable=False)
    zone_id = Column(Integer, nullable=True)
    machine_id = Column(Integer, nullable=True)
    team_ids = Column(JSON, nullable=True)
    status = Column(Integer, nullable=False, default=0)


class EventLog(Base):
    """Append-only audit trail of state changes."""
    __tablename__ = "event_logs"
    
    event_id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(Integer, nullable=True, index=True)
    event = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    logged_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    triggered_by = Column(Integer, nullable=True)
    
    __table_args__ = (
        Index('idx_event_logs_event_logged_at', 'event', 'logged_at'),
    )


class Dispatch(Base):
    """Dispatch record: presence for (project_id, lot_no) means the lot has shipped."""
    __tablename__ = "dispatches"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False, index=True)
    lot_no = Column(String(50), nullable=False)
    updated_at = Column(DateTime, nullable=True)


class Zone(Base):
    """Production floor zone."""
    __tablename__ = "zones"
    
    zone_id = Column(Integer, primary_key=True, autoincrement=True)
    zone_no = Column(String(50), nullable=False)
    zone_description = Column(String(255), nullable=True)


class Team(Base):
    """Team of users working a process."""
    __tablename__ = "teams"
    
    team_id = Column(Integer, primary_key=True, autoincrement=True)
    team_name = Column(String(255), nullable=False)
    user_ids = Column(JSON, nullable=True)


class User(Base):
    """Operator / supervisor."""
    __tablename__ = "users"
    
    user_id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)


class Machine(Base):
    """Production machine."""
    __tablename__ = "machines"
    
    machine_id = Column(Integer, primary_key=True, autoincrement=True)
    machine_name = Column(String(255), nullable=False)
