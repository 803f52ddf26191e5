"""
Shared fixtures for the table service tests.

- fresh table registry / order ledger per test
- a service desk writing receipts into tmp_path
- scripted terminal input via monkeypatched builtins.input
"""

import random

import pytest

from messijoe import OrderLedger, ReceiptWriter, ServiceDesk, TableRegistry


@pytest.fixture
def tables() -> TableRegistry:
    return TableRegistry()


@pytest.fixture
def ledger(tables) -> OrderLedger:
    return OrderLedger(tables)


@pytest.fixture
def receipt_dir(tmp_path):
    return tmp_path / "receipts"


@pytest.fixture
def desk(tables, ledger, receipt_dir) -> ServiceDesk:
    return ServiceDesk(tables, ledger, ReceiptWriter(receipt_dir), rng=random.Random(42))


@pytest.fixture
def feed_input(monkeypatch):
    """Script answers for input(); running out raises EOFError like a closed stdin."""
    prompts: list[str] = []

    def feed(*answers: str):
        queue = iter(answers)

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            try:
                return next(queue)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts

    return feed


@pytest.fixture
def completed_table(ledger):
    """Table 1 with two guests (Eggs, Ham) and the order marked complete."""
    ledger.place_order(1, 2, [2, 3])
    ledger.mark_completed(1)
    return 1
