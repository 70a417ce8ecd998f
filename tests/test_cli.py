"""Tests for the command-line interface."""

from datetime import date
from decimal import Decimal
from pathlib import Path

from huvudbok.cli.main import cli
from huvudbok.database.models import Verification as ORMVerification, VerificationRow as ORMVerificationRow
from huvudbok.utils.stream_protocol import parse_frames


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "verification" in result.output
    assert "review" in result.output


class TestAccountCommands:
    """Tests for account commands."""

    def test_init_bas_and_list(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "account", "init-bas")
        assert result.exit_code == 0
        assert "Created" in result.output

        result = _invoke(cli_runner, temp_db, "account", "init-bas")
        assert "All BAS accounts already exist." in result.output

        result = _invoke(cli_runner, temp_db, "account", "list", "--class", "equity")
        assert result.exit_code == 0
        assert "2081" in result.output
        assert "1930" not in result.output
        assert "Accounts (Eget kapital):" in result.output

        result = _invoke(cli_runner, temp_db, "account", "list", "--class", "liability")
        assert "Kortfristiga skulder" in result.output
        assert "Långfristiga skulder" in result.output

    def test_create_and_duplicate(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "account", "create", "1931", "Sparkonto")
        assert result.exit_code == 0
        assert "Created account 1931 'Sparkonto'" in result.output

        result = _invoke(cli_runner, temp_db, "account", "create", "1931", "Igen")
        assert result.exit_code == 1
        assert "Error: Account 1931 already exists" in result.output

    def test_create_invalid_number(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "account", "create", "193", "Fel")
        assert result.exit_code == 1
        assert "expected four digits" in result.output

    def test_list_empty(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "account", "list")
        assert "No accounts found." in result.output

    def test_delete_with_confirmation_flag(self, cli_runner, temp_db, account_service):
        account_service.create_account("1931", "Sparkonto")

        result = _invoke(cli_runner, temp_db, "account", "delete", "1931", "--yes")

        assert result.exit_code == 0
        assert "Deleted account 1931" in result.output

    def test_delete_blocked(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "account", "delete", "1930", "--yes")

        assert result.exit_code == 1
        assert "Cannot delete account 1930" in result.output


class TestVerificationCommands:
    """Tests for verification commands."""

    def test_add_list_show(self, cli_runner, temp_db, bas_chart):
        result = _invoke(
            cli_runner,
            temp_db,
            "verification", "add",
            "--date", "2024-01-10",
            "--description", "Nyemission",
            "--row", "1930:50 000,00:",
            "--row", "2081::50000:Aktiekapital",
        )
        assert result.exit_code == 0, result.output
        assert "Booked verification A1 (ID: 1)" in result.output

        result = _invoke(cli_runner, temp_db, "verification", "list", "--start-date", "2024-01-01")
        assert "A1" in result.output
        assert "50 000,00" in result.output

        result = _invoke(cli_runner, temp_db, "verification", "show", "1")
        assert "Nyemission" in result.output
        assert "Aktiekapital" in result.output

    def test_add_unbalanced_is_rejected(self, cli_runner, temp_db, bas_chart):
        result = _invoke(
            cli_runner,
            temp_db,
            "verification", "add",
            "--date", "2024-01-10",
            "--description", "Fel",
            "--row", "1930:100:",
            "--row", "3001::90",
        )

        assert result.exit_code == 1
        assert "do not balance" in result.output
        assert temp_db.count_verifications() == 0

    def test_add_malformed_row(self, cli_runner, temp_db, bas_chart):
        result = _invoke(
            cli_runner, temp_db, "verification", "add", "--date", "2024-01-10", "--description", "x", "--row", "1930"
        )
        assert result.exit_code == 1
        assert "expected ACCOUNT:DEBIT:CREDIT" in result.output

    def test_reverse(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "verification", "reverse", "2", "--date", "2024-01-20")
        assert result.exit_code == 0
        assert "Booked reversal A5" in result.output

        result = _invoke(cli_runner, temp_db, "verification", "reverse", "2")
        assert result.exit_code == 1
        assert "already been reversed" in result.output

    def test_show_missing(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "verification", "show", "99")
        assert result.exit_code == 1
        assert "Verification 99 not found" in result.output

    def test_sale_and_purchase(self, cli_runner, temp_db, bas_chart, report_service):
        result = _invoke(
            cli_runner, temp_db,
            "verification", "sale", "--date", "2024-02-01", "--amount", "12 500", "--description", "Faktura 1001",
        )
        assert result.exit_code == 0, result.output
        assert "1510" in result.output
        assert "2610" in result.output

        result = _invoke(
            cli_runner, temp_db,
            "verification", "purchase", "--date", "2024-02-03", "--amount", "2500",
            "--expense-account", "6110", "--description", "Kontorsmaterial",
        )
        assert result.exit_code == 0, result.output
        assert "2640" in result.output

        statement = report_service.income_statement(2024)
        assert statement.net_income == Decimal("8000")


class TestReportCommands:
    """Tests for report commands."""

    def test_balances(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "report", "balances", "--start-date", "2024-01-01", "--end-date", "2024-12-31")

        assert result.exit_code == 0
        assert "1930" in result.output
        assert "39 000,00" in result.output
        assert "10 000,00" in result.output

    def test_income_statement(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "report", "income-statement", "--year", "2024")

        assert result.exit_code == 0
        assert "Resultaträkning 2024" in result.output
        assert "Nettoomsättning" in result.output
        assert "-31 426,00" in result.output
        assert "3001 Försäljning inom Sverige, 25% moms" in result.output
        assert "7210 Löner till tjänstemän" in result.output

    def test_balance_sheet(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "report", "balance-sheet", "--as-of", "2024-12-31")

        assert result.exit_code == 0
        assert "Summa tillgångar" in result.output
        assert "does not balance" not in result.output

    def test_balance_sheet_mismatch_exits_2(self, cli_runner, temp_db, bas_chart):
        # Rows written straight to the store, bypassing booking validation
        session = temp_db._get_session()
        verification = ORMVerification(series="A", number=1, date=date(2024, 1, 1), description="Trasig import")
        verification.rows = [
            ORMVerificationRow(position=0, account_number="1930", debit=Decimal("100"), credit=Decimal("0")),
            ORMVerificationRow(position=1, account_number="3001", debit=Decimal("0"), credit=Decimal("90")),
        ]
        session.add(verification)
        session.commit()

        result = _invoke(cli_runner, temp_db, "report", "balance-sheet", "--as-of", "2024-12-31")

        assert result.exit_code == 2
        assert "does not balance, difference 10,00" in result.output


class TestDocumentCommands:
    """Tests for document commands."""

    def test_add_list_status(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "document", "add", "customer_invoice", "--date", "2024-03-01", "--amount", "12 500")
        assert result.exit_code == 0
        assert "Created customer_invoice (ID: 1)" in result.output

        result = _invoke(cli_runner, temp_db, "document", "status", "1", "Skickad")
        assert result.exit_code == 0

        result = _invoke(cli_runner, temp_db, "document", "list", "--kind", "customer_invoice")
        assert "Skickad" in result.output
        assert "12 500,00" in result.output

    def test_invalid_status(self, cli_runner, temp_db):
        _invoke(cli_runner, temp_db, "document", "add", "payslip", "--date", "2024-03-25")

        result = _invoke(cli_runner, temp_db, "document", "status", "1", "Betald")

        assert result.exit_code == 1
        assert "Unknown status 'Betald'" in result.output


class TestReviewCommand:
    """Tests for the monthly review command."""

    def test_text_output(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "review", "--year", "2024", "--month", "2")

        assert result.exit_code == 0
        assert "Månadsavstämning 2024-02" in result.output
        assert "Verifikationer (2)" in result.output

    def test_stream_output(self, cli_runner, temp_db, booked_year):
        result = _invoke(cli_runner, temp_db, "review", "--year", "2024", "--month", "1", "--stream")

        assert result.exit_code == 0
        frames = list(parse_frames(result.stdout.splitlines()))
        assert [frame.tag for frame in frames] == ["D"]
        review = frames[0].payload["monthlyReview"]
        assert Decimal(review["financial"]["revenue"]) == Decimal("10000")
        assert review["failed_sources"] == []

    def test_invalid_month(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "review", "--year", "2024", "--month", "13")
        assert result.exit_code == 1
        assert "Invalid month 13" in result.output


class TestCompanyAndExport:
    """Tests for company settings and SIE export commands."""

    def test_company_set_and_show(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "company", "set", "--name", "Exempel AB", "--org-number", "556677-8899")
        assert result.exit_code == 0

        result = _invoke(cli_runner, temp_db, "company", "show")
        assert "Exempel AB" in result.output
        assert "556677-8899" in result.output

    def test_company_set_requires_option(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "company", "set")
        assert result.exit_code == 1

    def test_export_sie(self, cli_runner, temp_db, booked_year, tmp_path):
        target = tmp_path / "bokforing_2024.se"

        result = _invoke(cli_runner, temp_db, "export", "sie", str(target), "--year", "2024")

        assert result.exit_code == 0
        assert target.exists()
        assert "#SIETYP 4" in target.read_text(encoding="cp437")

    def test_company_address(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db,
            "company", "set", "--contact", "Anna Andersson", "--postal-code", "111 22", "--city", "Stockholm",
        )
        assert result.exit_code == 0, result.output

        result = _invoke(cli_runner, temp_db, "company", "show")
        assert "Anna Andersson" in result.output
        assert "Postal address:    111 22 Stockholm" in result.output
        assert "Address:           -" in result.output

    def test_export_sie_default_filename(self, cli_runner, temp_db, booked_year, tmp_path):
        _invoke(cli_runner, temp_db, "company", "set", "--org-number", "556677-8899")

        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as directory:
            result = _invoke(cli_runner, temp_db, "export", "sie", "--year", "2024")

            assert result.exit_code == 0, result.output
            target = Path(directory) / "bokforing_5566778899_2024.se"
            assert target.exists()
            assert "#RAR -1 20230101 20231231" in target.read_text(encoding="cp437")
