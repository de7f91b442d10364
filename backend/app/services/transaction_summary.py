"""Zone/team/machine attribution summary across a catch's transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class TeamDetail:
    team_name: str
    user_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionSummary:
    zone_descriptions: list[str] = field(default_factory=list)
    team_details: list[TeamDetail] = field(default_factory=list)
    machine_names: list[str] = field(default_factory=list)


def _distinct(values) -> list:
    seen: set = set()
    ordered: list = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


def summarize_transactions(
    transactions: Sequence[object],
    *,
    zones: Mapping[int, object],
    teams: Mapping[int, object],
    users: Mapping[int, object],
    machines: Mapping[int, object],
) -> TransactionSummary:
    """Resolve distinct zones, teams and machines; unresolved references are dropped."""
    zone_descriptions: list[str] = []
    for zone_id in _distinct(t.zone_id for t in transactions):
        zone = zones.get(zone_id)
        description: Optional[str] = zone.zone_description if zone is not None else None
        if description is not None:
            zone_descriptions.append(description)

    team_details: list[TeamDetail] = []
    team_ids = _distinct(team_id for t in transactions for team_id in (t.team_ids or []))
    for team_id in team_ids:
        team = teams.get(team_id)
        if team is None or team.team_name is None:
            continue
        user_names = [
            users[user_id].user_name
            for user_id in (team.user_ids or [])
            if user_id in users and users[user_id].user_name is not None
        ]
        team_details.append(TeamDetail(team_name=team.team_name, user_names=user_names))

    machine_names: list[str] = []
    for machine_id in _distinct(t.machine_id for t in transactions):
        machine = machines.get(machine_id)
        if machine is not None and machine.machine_name is not None:
            machine_names.append(machine.machine_name)

    return TransactionSummary(
        zone_descriptions=zone_descriptions,
        team_details=team_details,
        machine_names=machine_names,
    )
