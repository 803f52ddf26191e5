import random
from decimal import Decimal

import pytest

from messijoe import ReceiptWriter, build_receipt, format_rate, new_transaction_id


@pytest.fixture
def paid_order(ledger, completed_table):
    result = ledger.record_payment(completed_table, True)
    return ledger.order_for(completed_table), result.bill


def test_receipt_layout(paid_order):
    order, bill = paid_order
    receipt = build_receipt(order, bill, transaction_id=4321)
    assert receipt.filename == "Transaction#4321.txt"
    assert receipt.lines == (
        "*** RECEIPT FOR TABLE 1 ***",
        "-------------------------",
        "Eggs - $45.00",
        "Ham - $38.00",
        "-------------------------",
        "Subtotal: $83.00",
        "Tip (20%): $16.60",
        "Tax (10%): $8.30",
        "Total: $107.90",
    )
    assert receipt.text.endswith("Total: $107.90\n")


def test_receipt_requires_payment(ledger, completed_table):
    order = ledger.order_for(completed_table)
    with pytest.raises(ValueError):
        build_receipt(order, ledger.bill_for(completed_table), transaction_id=1000)


def test_transaction_ids_stay_four_digits():
    rng = random.Random(7)
    ids = {new_transaction_id(rng) for _ in range(500)}
    assert all(1000 <= i <= 9999 for i in ids)


def test_seeded_ids_are_reproducible(paid_order):
    order, bill = paid_order
    first = build_receipt(order, bill, rng=random.Random(3))
    second = build_receipt(order, bill, rng=random.Random(3))
    assert first.transaction_id == second.transaction_id


def test_writer_saves_utf8_file(tmp_path, paid_order):
    order, bill = paid_order
    receipt = build_receipt(order, bill, transaction_id=1234)
    path = ReceiptWriter(tmp_path / "out").write(receipt)
    assert path == tmp_path / "out" / "Transaction#1234.txt"
    assert path.read_text(encoding="utf-8") == receipt.text


def test_writer_overwrites_on_id_collision(tmp_path, paid_order):
    order, bill = paid_order
    writer = ReceiptWriter(tmp_path)
    writer.write(build_receipt(order, bill, transaction_id=1111))
    path = writer.write(build_receipt(order, bill, transaction_id=1111))
    assert len(list(tmp_path.iterdir())) == 1
    assert "Total: $107.90" in path.read_text(encoding="utf-8")


@pytest.mark.parametrize("rate, label", [
    (Decimal("0.10"), "10%"),
    (Decimal("0.20"), "20%"),
    (Decimal("0.125"), "12.5%"),
])
def test_rate_labels(rate, label):
    assert format_rate(rate) == label
