from types import SimpleNamespace

from app.services.catch_status import (
    CatchStatus,
    derive_catch_progress,
    derive_catch_status,
    has_terminal_transaction,
    latest_process_id,
)

PROCESS_NAMES = {5: "Printing", 8: "Cutting", 12: "Dispatch"}


def _txn(transaction_id: int, process_id: int, status: int) -> SimpleNamespace:
    return SimpleNamespace(transaction_id=transaction_id, process_id=process_id, status=status)


def _status(transactions, terminal_process_id: int = 12) -> CatchStatus:
    return derive_catch_status(transactions, terminal_process_id=terminal_process_id, completed_status=2)


def test_catch_without_transactions_is_pending_with_no_current_process() -> None:
    progress = derive_catch_progress([], PROCESS_NAMES, terminal_process_id=12, completed_status=2)

    assert progress.status is CatchStatus.PENDING
    assert progress.current_process_id is None
    assert progress.current_process_name is None


def test_completed_terminal_transaction_wins_over_other_states() -> None:
    progress = derive_catch_progress(
        [_txn(1, 5, 1), _txn(2, 12, 2)],
        PROCESS_NAMES,
        terminal_process_id=12,
        completed_status=2,
    )

    assert progress.status is CatchStatus.COMPLETED
    assert progress.current_process_name == "Dispatch"


def test_running_when_non_terminal_work_exists_and_terminal_not_completed() -> None:
    assert _status([_txn(1, 5, 2), _txn(2, 12, 1)]) is CatchStatus.RUNNING
    assert _status([_txn(1, 5, 0)]) is CatchStatus.RUNNING


def test_only_unfinished_terminal_transactions_stay_pending() -> None:
    assert _status([_txn(1, 12, 1)]) is CatchStatus.PENDING


def test_first_terminal_transaction_decides_completion() -> None:
    # A later completed retry on the terminal process does not override the first one.
    assert _status([_txn(1, 12, 1), _txn(2, 12, 2)]) is CatchStatus.PENDING
    assert _status([_txn(1, 12, 2), _txn(2, 12, 1)]) is CatchStatus.COMPLETED


def test_terminal_process_id_is_configurable() -> None:
    transactions = [_txn(1, 8, 2), _txn(2, 5, 1)]

    assert _status(transactions, terminal_process_id=8) is CatchStatus.COMPLETED
    assert _status(transactions, terminal_process_id=12) is CatchStatus.RUNNING


def test_current_process_follows_highest_transaction_id_not_list_order() -> None:
    transactions = [_txn(9, 8, 1), _txn(3, 12, 2), _txn(7, 5, 1)]

    assert latest_process_id(transactions) == 8
    progress = derive_catch_progress(transactions, PROCESS_NAMES, terminal_process_id=12, completed_status=2)
    assert progress.current_process_name == "Cutting"


def test_unknown_current_process_name_is_none() -> None:
    progress = derive_catch_progress([_txn(1, 77, 1)], PROCESS_NAMES, terminal_process_id=12, completed_status=2)

    assert progress.current_process_id == 77
    assert progress.current_process_name is None


def test_terminal_transaction_detection() -> None:
    assert has_terminal_transaction([_txn(1, 5, 1), _txn(2, 12, 0)], terminal_process_id=12) is True
    assert has_terminal_transaction([_txn(1, 5, 1)], terminal_process_id=12) is False
