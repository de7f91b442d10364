"""Lifecycle status derivation for a catch from its process transactions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence


class CatchStatus(str, Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class CatchProgress:
    status: CatchStatus
    current_process_id: Optional[int] = None
    current_process_name: Optional[str] = None


def derive_catch_status(
    transactions: Sequence[object],
    *,
    terminal_process_id: int,
    completed_status: int,
) -> CatchStatus:
    """Derive Pending/Running/Completed.

    Only the first transaction recorded on the terminal process decides completion;
    any other transaction (terminal or not) cannot turn a catch Completed.
    """
    if not transactions:
        return CatchStatus.PENDING

    terminal = next((t for t in transactions if t.process_id == terminal_process_id), None)
    if terminal is not None and terminal.status == completed_status:
        return CatchStatus.COMPLETED
    if any(t.process_id != terminal_process_id for t in transactions):
        return CatchStatus.RUNNING
    return CatchStatus.PENDING


def latest_process_id(transactions: Iterable[object]) -> Optional[int]:
    """Process of the transaction with the highest id (id order stands in for recency)."""
    latest = max(transactions, key=lambda t: t.transaction_id, default=None)
    return latest.process_id if latest is not None else None


def derive_catch_progress(
    transactions: Sequence[object],
    process_names: Mapping[int, str],
    *,
    terminal_process_id: int,
    completed_status: int,
) -> CatchProgress:
    process_id = latest_process_id(transactions)
    return CatchProgress(
        status=derive_catch_status(
            transactions,
            terminal_process_id=terminal_process_id,
            completed_status=completed_status,
        ),
        current_process_id=process_id,
        current_process_name=process_names.get(process_id) if process_id is not None else None,
    )


def has_terminal_transaction(transactions: Iterable[object], *, terminal_process_id: int) -> bool:
    return any(t.process_id == terminal_process_id for t in transactions)
