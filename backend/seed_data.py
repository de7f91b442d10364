"""Seed database with demo production data."""
from datetime import datetime

from app.database import Base, SessionLocal, engine
from app.models import (
    Dispatch, EventLog, Group, Machine, Process, ProcessTransaction,
    Project, ProjectProcess, QuantitySheet, Team, User, Zone
)


def populate_demo_data(db):
    """Insert a small two-project workflow snapshot (caller commits)."""
    db.add_all([
        Group(id=1, name="State University", status=True),
        Group(id=2, name="Secondary Board", status=True),
    ])
    db.add_all([
        Project(project_id=1, name="Semester Exams", group_id=1, type_id=1),
        Project(project_id=2, name="Board Papers", group_id=2, type_id=2),
    ])
    db.add_all([
        Process(id=1, name="Data Processing"),
        Process(id=5, name="Printing"),
        Process(id=8, name="Cutting"),
        Process(id=12, name="Dispatch"),
    ])
    db.flush()

    # Inserted out of sequence order.
    db.add_all([
        ProjectProcess(project_id=1, process_id=12, sequence=4),
        ProjectProcess(project_id=1, process_id=1, sequence=1),
        ProjectProcess(project_id=1, process_id=8, sequence=3),
        ProjectProcess(project_id=1, process_id=5, sequence=2),
    ])
    db.add_all([
        Zone(zone_id=1, zone_no="Z1", zone_description="Press hall"),
        Zone(zone_id=2, zone_no="Z2", zone_description="Finishing"),
    ])
    db.add_all([
        Machine(machine_id=1, machine_name="Heidelberg SM 52"),
        Machine(machine_id=2, machine_name="Guillotine"),
    ])
    db.add_all([
        User(user_id=1, user_name="asha", first_name="Asha", last_name="Rao"),
        User(user_id=2, user_name="vikram", first_name="Vikram", last_name="Singh"),
        User(user_id=3, user_name="meera", first_name="Meera", last_name="Iyer"),
    ])
    db.add(Team(team_id=1, team_name="Press crew", user_ids=[2, 3]))
    db.add_all([
        QuantitySheet(
            quantitysheet_id=1, project_id=1, lot_no="L1", catch_no="C-001",
            course="B.Sc", subject="Physics", paper="PHY-101", exam_date="05-03-2024",
            quantity=100, pages=8, process_ids=[1, 5, 12], status=1,
        ),
        QuantitySheet(
            quantitysheet_id=2, project_id=1, lot_no="L1", catch_no="C-002",
            course="B.Sc", subject="Chemistry", paper=None, exam_date="07-03-2024",
            quantity=50, pages=12, process_ids=None, status=1,
        ),
        QuantitySheet(
            quantitysheet_id=3, project_id=1, lot_no="L2", catch_no="C-003",
            course="B.A", subject="History", paper="HIS-201", exam_date="TBD",
            quantity=70, pages=6, process_ids=[1], status=1,
        ),
        QuantitySheet(
            quantitysheet_id=4, project_id=2, lot_no="L1", catch_no="B-100",
            course="Class X", subject="Mathematics", paper="MATH-10", exam_date="10-03-2024",
            quantity=30, pages=4, process_ids=[5], status=1,
        ),
    ])
    db.flush()

    db.add_all([
        ProcessTransaction(
            transaction_id=1, quantitysheet_id=1, project_id=1, lot_no="L1",
            process_id=5, zone_id=1, machine_id=1, team_ids=[2, 3], status=2,
        ),
        ProcessTransaction(
            transaction_id=2, quantitysheet_id=1, project_id=1, lot_no="L1",
            process_id=12, zone_id=2, machine_id=2, team_ids=[1], status=2,
        ),
        ProcessTransaction(
            transaction_id=3, quantitysheet_id=2, project_id=1, lot_no="L1",
            process_id=5, zone_id=1, machine_id=1, team_ids=[2], status=1,
        ),
        ProcessTransaction(
            transaction_id=4, quantitysheet_id=3, project_id=1, lot_no="L2",
            process_id=1, zone_id=99, machine_id=None, team_ids=None, status=2,
        ),
    ])
    db.add_all([
        EventLog(event_id=1, transaction_id=1, event="Status updated", old_value="0", new_value="1",
                 logged_at=datetime(2024, 1, 1, 9, 0), triggered_by=1),
        EventLog(event_id=2, transaction_id=1, event="Status updated", old_value="1", new_value="2",
                 logged_at=datetime(2024, 1, 1, 9, 3), triggered_by=2),
        EventLog(event_id=3, transaction_id=2, event="Status updated", old_value="1", new_value="2",
                 logged_at=datetime(2024, 1, 1, 11, 0), triggered_by=3),
        EventLog(event_id=4, transaction_id=4, event="Status updated", old_value="1", new_value="2",
                 logged_at=datetime(2024, 1, 1, 12, 0), triggered_by=1),
        EventLog(event_id=5, transaction_id=3, event="Status updated", old_value="0", new_value="1",
                 logged_at=datetime(2024, 1, 2, 10, 0), triggered_by=2),
        EventLog(event_id=6, transaction_id=None, event="Catch created", category="Production",
                 old_value=None, new_value="project 1 catch C-001",
                 logged_at=datetime(2023, 12, 31, 18, 0), triggered_by=1),
    ])
    db.add(Dispatch(project_id=2, lot_no="L1", updated_at=datetime(2024, 1, 5, 16, 30)))
    db.flush()


def seed():
    """Create tables and seed database with demo data."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    
    try:
        populate_demo_data(db)
        db.commit()
        print("✅ Database seeded successfully!")
        print("\nTry:")
        print("  GET /api/v1/reports/daily-production?date=01-01-2024")
        print("  GET /api/v1/reports/process-wise/C-001")
        print("  GET /api/v1/reports/under-production")
        
    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
