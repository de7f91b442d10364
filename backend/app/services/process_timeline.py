"""Per-process execution timeline of a single catch.

Entries follow the project's configured process sequence, never the order in
which transactions were recorded. Each transaction is attributed to a zone,
team members, a supervisor and a machine; any reference that does not resolve
becomes None instead of failing the timeline.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class TimelineTransaction:
    transaction_id: int
    zone_name: Optional[str] = None
    team_members: list[str] = field(default_factory=list)
    supervisor: Optional[str] = None
    machine_name: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


@dataclass(frozen=True)
class TimelineProcess:
    process_id: int
    transactions: list[TimelineTransaction] = field(default_factory=list)


def user_full_name(user: object) -> str:
    return f"{user.first_name or ''} {user.last_name or ''}"


def ordered_process_ids(project_processes: Sequence[object], transactions: Sequence[object]) -> list[int]:
    """Process ids of the project sequence that have at least one transaction, by sequence."""
    executed = {t.process_id for t in transactions}
    ordered: list[int] = []
    for step in sorted(project_processes, key=lambda pp: pp.sequence):
        if step.process_id in executed and step.process_id not in ordered:
            ordered.append(step.process_id)
    return ordered


def build_process_timeline(
    *,
    transactions: Sequence[object],
    project_processes: Sequence[object],
    event_logs: Sequence[object],
    zones: Mapping[int, object],
    users: Sequence[object],
    machines: Mapping[int, object],
    status_event: str,
) -> list[TimelineProcess]:
    """Build the timeline from transactions and their event logs.

    `event_logs` must hold every log entry of these transactions in recording order:
    the supervisor is whoever triggered the first entry of any type, while start/end
    times only consider `status_event` entries.
    """
    users_by_id = {user.user_id: user for user in users}

    first_trigger_by_txn: dict[int, Optional[int]] = {}
    status_times_by_txn: dict[int, list[datetime]] = defaultdict(list)
    for log in event_logs:
        if log.transaction_id is None:
            continue
        first_trigger_by_txn.setdefault(log.transaction_id, log.triggered_by)
        if log.event == status_event and log.logged_at is not None:
            status_times_by_txn[log.transaction_id].append(log.logged_at)

    timeline: list[TimelineProcess] = []
    for process_id in ordered_process_ids(project_processes, transactions):
        entries: list[TimelineTransaction] = []
        for txn in transactions:
            if txn.process_id != process_id:
                continue

            zone = zones.get(txn.zone_id)
            machine = machines.get(txn.machine_id)
            team_ids = set(txn.team_ids or [])
            supervisor = users_by_id.get(first_trigger_by_txn.get(txn.transaction_id))
            times = status_times_by_txn.get(txn.transaction_id, [])

            entries.append(
                TimelineTransaction(
                    transaction_id=txn.transaction_id,
                    zone_name=zone.zone_no if zone is not None else None,
                    # Team ids are matched against user ids directly.
                    team_members=[user_full_name(u) for u in users if u.user_id in team_ids],
                    supervisor=user_full_name(supervisor) if supervisor is not None else None,
                    machine_name=machine.machine_name if machine is not None else None,
                    start_time=min(times) if times else None,
                    end_time=max(times) if times else None,
                )
            )
        timeline.append(TimelineProcess(process_id=process_id, transactions=entries))
    return timeline
