"""Tests for verification draft builders."""

from datetime import date
from decimal import Decimal

import pytest

from huvudbok.domain.entries import (
    calculate_gross,
    calculate_vat,
    payment_received_entry,
    purchase_entry,
    round_to_ore,
    salary_entry,
    sales_entry,
)
from huvudbok.domain.errors import ValidationError
from huvudbok.domain.validation import validate


def _by_account(draft):
    return {row.account: (row.debit, row.credit) for row in draft.rows}


def test_round_to_ore_half_up():
    assert round_to_ore("10.005") == Decimal("10.01")
    assert round_to_ore("10.004") == Decimal("10.00")
    assert round_to_ore(None) == Decimal("0.00")


@pytest.mark.parametrize(
    "gross,rate,net,vat",
    [
        ("125", 25, "100.00", "25.00"),
        ("112", 12, "100.00", "12.00"),
        ("106", 6, "100.00", "6.00"),
        ("100", 0, "100.00", "0"),
        ("99.99", 25, "79.99", "20.00"),
    ],
)
def test_calculate_vat(gross, rate, net, vat):
    result_net, result_vat = calculate_vat(Decimal(gross), rate)
    assert result_net == Decimal(net)
    assert result_vat == Decimal(vat)
    assert result_net + result_vat == round_to_ore(gross)


def test_calculate_gross():
    assert calculate_gross(Decimal("100"), 25) == (Decimal("125.00"), Decimal("25.00"))


def test_invalid_vat_rate():
    with pytest.raises(ValidationError, match="Invalid VAT rate"):
        calculate_vat(Decimal("100"), 20)


def test_sales_entry_books_receivable_revenue_and_output_vat():
    draft = sales_entry(date(2024, 2, 1), "Faktura 1001", Decimal("12500"))

    assert _by_account(draft) == {
        "1510": (Decimal("12500.00"), Decimal("0")),
        "3001": (Decimal("0"), Decimal("10000.00")),
        "2610": (Decimal("0"), Decimal("2500.00")),
    }
    assert validate(draft.rows).balanced


def test_sales_entry_vat_account_follows_rate():
    draft = sales_entry(date(2024, 2, 1), "Bok", Decimal("106"), vat_rate=6, revenue_account="3002")
    assert "2630" in _by_account(draft)


def test_sales_entry_without_vat_has_two_rows():
    draft = sales_entry(date(2024, 2, 1), "Export", Decimal("1000"), vat_rate=0, revenue_account="3105")
    assert len(draft.rows) == 2


def test_sales_entry_rejects_non_positive_amount():
    with pytest.raises(ValidationError, match="must be positive"):
        sales_entry(date(2024, 2, 1), "Noll", Decimal("0"))


def test_purchase_entry_books_input_vat():
    draft = purchase_entry(date(2024, 2, 3), "Kontorsmaterial", Decimal("2500"), "6110")

    assert _by_account(draft) == {
        "6110": (Decimal("2000.00"), Decimal("0")),
        "2640": (Decimal("500.00"), Decimal("0")),
        "1930": (Decimal("0"), Decimal("2500.00")),
    }
    assert validate(draft.rows).balanced


def test_payment_received_entry():
    draft = payment_received_entry(date(2024, 3, 1), Decimal("12500"), customer_name="Kund AB")

    assert draft.description == "Betalning mottagen från Kund AB"
    assert _by_account(draft) == {
        "1930": (Decimal("12500.00"), Decimal("0")),
        "1510": (Decimal("0"), Decimal("12500.00")),
    }


def test_salary_entry():
    draft = salary_entry(date(2024, 2, 25), Decimal("30000"), Decimal("9000"), Decimal("9426"), "Anna")

    rows = _by_account(draft)
    assert rows["7210"] == (Decimal("30000.00"), Decimal("0"))
    assert rows["7510"] == (Decimal("9426.00"), Decimal("0"))
    assert rows["1930"] == (Decimal("0"), Decimal("21000.00"))
    assert draft.description == "Löneutbetalning Anna"
    assert validate(draft.rows).balanced


def test_salary_entry_rejects_tax_above_gross():
    with pytest.raises(ValidationError):
        salary_entry(date(2024, 2, 25), Decimal("100"), Decimal("200"), Decimal("0"))
