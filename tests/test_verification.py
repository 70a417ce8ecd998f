"""Tests for verification booking."""

from datetime import date
from decimal import Decimal

import pytest

from huvudbok.domain.entities import VerificationRow
from huvudbok.domain.errors import ConflictError, NotFoundError, ValidationError


def _rows(amount="100", debit_account="1930", credit_account="3001"):
    return [
        VerificationRow(account=debit_account, debit=Decimal(amount)),
        VerificationRow(account=credit_account, credit=Decimal(amount)),
    ]


class TestCreateVerification:
    """Tests for VerificationService.create_verification."""

    def test_books_and_reads_back(self, verification_service, bas_chart):
        verification_id = verification_service.create_verification(
            date(2024, 1, 15),
            "Försäljning",
            [
                VerificationRow(account="1930", debit=Decimal("50000")),
                VerificationRow(account="3001", credit=Decimal("40000"), description="Konsulttjänst"),
                VerificationRow(account="2610", credit=Decimal("10000")),
            ],
        )

        verification = verification_service.get_verification(verification_id)
        assert verification.reference == "A1"
        assert verification.date == date(2024, 1, 15)
        assert [row.account for row in verification.rows] == ["1930", "3001", "2610"]
        assert verification.rows[0].debit == Decimal("50000")
        assert verification.rows[1].description == "Konsulttjänst"

    def test_numbers_per_series(self, verification_service, bas_chart):
        ids = [
            verification_service.create_verification(date(2024, 1, 1), "A", _rows()),
            verification_service.create_verification(date(2024, 1, 2), "A", _rows()),
            verification_service.create_verification(date(2024, 1, 3), "B", _rows(), series="b"),
        ]

        references = [verification_service.get_verification(i).reference for i in ids]
        assert references == ["A1", "A2", "B1"]
        assert verification_service.next_verification_number("A") == 3

    def test_rejects_unbalanced(self, verification_service, bas_chart):
        rows = [
            VerificationRow(account="1930", debit=Decimal("100")),
            VerificationRow(account="3001", credit=Decimal("90")),
        ]

        with pytest.raises(ValidationError, match="do not balance"):
            verification_service.create_verification(date(2024, 1, 1), "Fel", rows)
        assert verification_service.list_verifications() == []

    def test_rejects_account_outside_chart(self, verification_service, account_service):
        account_service.create_account("1930", "Bank")

        with pytest.raises(ValidationError, match="not in the chart"):
            verification_service.create_verification(date(2024, 1, 1), "Fel", _rows())

    def test_rejects_sub_ore_amounts(self, verification_service, bas_chart):
        rows = [VerificationRow(account="1930", debit=Decimal("100.00"))]
        rows += [VerificationRow(account="3001", credit=Decimal("33.334")) for _ in range(3)]

        with pytest.raises(ValidationError, match="whole öre"):
            verification_service.create_verification(date(2024, 1, 1), "Fel", rows)
        assert verification_service.list_verifications() == []

    def test_rejects_empty(self, verification_service, bas_chart):
        with pytest.raises(ValidationError, match="at least one row"):
            verification_service.create_verification(date(2024, 1, 1), "Tom", [])

    def test_check_reports_without_raising(self, verification_service, bas_chart):
        result = verification_service.check(date(2024, 1, 1), "", _rows())
        assert result.is_valid
        assert result.warnings == ("Missing description",)


class TestDatabaseRevalidation:
    """The store re-checks the balance inside the insert transaction."""

    def test_store_rejects_unbalanced_rows(self, temp_db):
        rows = [
            VerificationRow(account="1930", debit=Decimal("100")),
            VerificationRow(account="3001", credit=Decimal("50")),
        ]

        with pytest.raises(ValidationError):
            temp_db.create_verification(series="A", number=1, date=date(2024, 1, 1), description="x", rows=rows)
        assert temp_db.count_verifications() == 0

    def test_store_checks_amounts_at_stored_scale(self, temp_db):
        # Balanced within tolerance in memory, 99.99 against 100.00 once stored
        rows = [VerificationRow(account="1930", debit=Decimal("100.00"))]
        rows += [VerificationRow(account="3001", credit=Decimal("33.334")) for _ in range(3)]

        with pytest.raises(ValidationError, match="differ by 0.01"):
            temp_db.create_verification(series="A", number=1, date=date(2024, 1, 1), description="x", rows=rows)
        assert temp_db.count_verifications() == 0
        assert temp_db.list_ledger_rows() == []

    def test_store_keeps_two_decimals(self, temp_db):
        rows = [
            VerificationRow(account="1930", debit=Decimal("19.90")),
            VerificationRow(account="3001", credit=Decimal("19.9")),
        ]

        verification_id = temp_db.create_verification(
            series="A", number=1, date=date(2024, 1, 1), description="x", rows=rows
        )

        stored = temp_db.get_verification(verification_id)
        assert [row.debit + row.credit for row in stored.rows] == [Decimal("19.90"), Decimal("19.90")]

    def test_store_rejects_duplicate_number(self, temp_db):
        temp_db.create_verification(series="A", number=1, date=date(2024, 1, 1), description="x", rows=_rows())

        with pytest.raises(ConflictError):
            temp_db.create_verification(series="A", number=1, date=date(2024, 1, 2), description="y", rows=_rows())
        assert temp_db.count_verifications() == 1


class TestListVerifications:
    """Tests for listing verifications."""

    def test_filters_by_date_and_series(self, verification_service, bas_chart):
        verification_service.create_verification(date(2024, 1, 1), "Jan", _rows())
        verification_service.create_verification(date(2024, 2, 1), "Feb", _rows())
        verification_service.create_verification(date(2024, 2, 2), "Feb B", _rows(), series="B")

        february = verification_service.list_verifications(date(2024, 2, 1), date(2024, 2, 29))
        assert [ver.description for ver in february] == ["Feb", "Feb B"]

        series_b = verification_service.list_verifications(series="b")
        assert [ver.reference for ver in series_b] == ["B1"]


class TestReverseVerification:
    """Tests for reversing verifications."""

    def test_reversal_swaps_debit_and_credit(self, verification_service, bas_chart):
        original_id = verification_service.create_verification(date(2024, 3, 1), "Felbokning", _rows("250"))

        reversal_id = verification_service.reverse_verification(original_id, date(2024, 3, 5))

        reversal = verification_service.get_verification(reversal_id)
        assert reversal.reverses_id == original_id
        assert reversal.date == date(2024, 3, 5)
        assert reversal.description == "Rättelse av A1: Felbokning"
        assert reversal.rows[0].account == "1930"
        assert reversal.rows[0].credit == Decimal("250")
        assert reversal.rows[1].debit == Decimal("250")

    def test_reversal_defaults_to_original_date(self, verification_service, bas_chart):
        original_id = verification_service.create_verification(date(2024, 3, 1), "Fel", _rows())
        reversal_id = verification_service.reverse_verification(original_id)
        assert verification_service.get_verification(reversal_id).date == date(2024, 3, 1)

    def test_cannot_reverse_twice(self, verification_service, bas_chart):
        original_id = verification_service.create_verification(date(2024, 3, 1), "Fel", _rows())
        verification_service.reverse_verification(original_id)

        with pytest.raises(ConflictError, match="already been reversed"):
            verification_service.reverse_verification(original_id)

    def test_reverse_missing(self, verification_service):
        with pytest.raises(NotFoundError):
            verification_service.reverse_verification(99)

    def test_reversal_cancels_balances(self, verification_service, report_service, bas_chart):
        original_id = verification_service.create_verification(date(2024, 3, 1), "Fel", _rows("1000"))
        verification_service.reverse_verification(original_id)

        statement = report_service.income_statement(2024)
        assert statement.net_income == 0
