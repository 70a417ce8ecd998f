"""SIE4 export of the chart, balances and verifications of one fiscal year."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional

import structlog

from huvudbok.database.base import Database
from huvudbok.domain.balances import aggregate
from huvudbok.domain.classifier import is_balance_account
from huvudbok.domain.company import CompanyService
from huvudbok.domain.entities import Company
from huvudbok.utils.date_parser import year_range

logger = structlog.get_logger(__name__)

PROGRAM_NAME = "huvudbok"
PROGRAM_VERSION = "1.0"
SIE_ENCODING = "cp437"
LINE_ENDING = "\r\n"

CURRENT_YEAR = 0
PREVIOUS_YEAR = -1


def format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


def quote(value: Optional[str]) -> str:
    """Quote a SIE string field, doubling embedded quotes."""
    text = (value or "").replace('"', '""')
    return f'"{text}"'


def account_type_code(account_number: str) -> str:
    """SIE #KTYP code: T (tillgång), S (skuld), I (intäkt) or K (kostnad)."""
    first = account_number[:1]
    if first == "1":
        return "T"
    if first == "2":
        return "S"
    if first == "3":
        return "I"
    return "K"


def tax_year(year: int) -> int:
    """Taxation year for a calendar fiscal year: income is declared the year after."""
    return year + 1


def default_filename(company: Company, year: int) -> str:
    """Standard export file name, ``bokforing_<orgnr>_<year>.se``."""
    org_number = company.org_number.replace("-", "") if company.org_number else "export"
    return f"bokforing_{org_number}_{year}.se"


def address_line(company: Company) -> str:
    """#ADRESS record: contact, street address, postal address, phone."""
    postal = f"{company.postal_code or ''} {company.city or ''}".strip()
    parts = (company.contact, company.address, postal, company.phone)
    return "#ADRESS " + " ".join(quote(part) for part in parts)


class SieExportService:
    """Builds SIE type 4 files from the ledger."""

    def __init__(self, db: Database):
        """Initialize SIE export service.

        Args:
            db: Database instance
        """
        self.db = db
        self._logger = logger.bind(component="sie_export")

    def _balance_records(self, year_index: int, start: date, end: date) -> list[str]:
        opening = aggregate(self.db.list_ledger_rows(end_date=start - timedelta(days=1)))
        closing = aggregate(self.db.list_ledger_rows(end_date=end))
        period = aggregate(self.db.list_ledger_rows(start_date=start, end_date=end))

        lines = []
        for account_number, amount in sorted(opening.items()):
            if amount and is_balance_account(account_number):
                lines.append(f"#IB {year_index} {account_number} {format_amount(amount)}")
        for account_number, amount in sorted(closing.items()):
            if amount and is_balance_account(account_number):
                lines.append(f"#UB {year_index} {account_number} {format_amount(amount)}")
        for account_number, amount in sorted(period.items()):
            if amount and not is_balance_account(account_number):
                lines.append(f"#RES {year_index} {account_number} {format_amount(amount)}")
        return lines

    def build_lines(self, year: int, generated_at: Optional[datetime] = None) -> list[str]:
        """Build the SIE4 lines for a calendar fiscal year.

        The previous year is included as comparison year -1 with its own
        #IB, #UB and #RES records. Opening (#IB) and closing (#UB) balances
        are written for balance accounts, period results (#RES) for result
        accounts. Transaction amounts are positive for debit and negative
        for credit.
        """
        start, end = year_range(year)
        previous_start, previous_end = year_range(year - 1)
        company = CompanyService(self.db).get_company()
        generated_at = generated_at or datetime.now()

        lines = [
            "#FLAGGA 0",
            f"#PROGRAM {quote(PROGRAM_NAME)} {PROGRAM_VERSION}",
            "#FORMAT PC8",
            f"#GEN {format_date(generated_at.date())}",
            "#SIETYP 4",
        ]
        if company.org_number:
            lines.append(f"#ORGNR {company.org_number.replace('-', '')}")
        lines.append(f"#FNAMN {quote(company.name)}")
        if company.has_address:
            lines.append(address_line(company))
        lines.append(f"#TAXAR {tax_year(year)}")
        lines.append(f"#OMFATTN {format_date(end)}")
        lines.append(f"#RAR {CURRENT_YEAR} {format_date(start)} {format_date(end)}")
        lines.append(f"#RAR {PREVIOUS_YEAR} {format_date(previous_start)} {format_date(previous_end)}")
        lines.append("#KPTYP BAS2014")
        lines.append("#VALUTA SEK")

        for account in self.db.list_accounts():
            lines.append(f"#KONTO {account.account_number} {quote(account.name)}")
            lines.append(f"#KTYP {account.account_number} {account_type_code(account.account_number)}")

        lines.extend(self._balance_records(CURRENT_YEAR, start, end))
        lines.extend(self._balance_records(PREVIOUS_YEAR, previous_start, previous_end))

        verifications = sorted(
            self.db.list_verifications(start_date=start, end_date=end),
            key=lambda ver: (ver.series, ver.number),
        )
        for ver in verifications:
            ver_date = format_date(ver.date)
            header = f"#VER {ver.series} {ver.number} {ver_date} {quote(ver.description)}"
            if ver.created_at is not None:
                header += f" {format_date(ver.created_at.date())}"
            lines.append(header)
            lines.append("{")
            for row in ver.rows:
                amount = format_amount(row.debit - row.credit)
                trans = f"\t#TRANS {row.account} {{}} {amount} {ver_date}"
                if row.description:
                    trans += f" {quote(row.description)}"
                lines.append(trans)
            lines.append("}")

        return lines

    def default_path(self, year: int, directory=".") -> Path:
        """Default export location in ``directory`` for a year."""
        return Path(directory) / default_filename(CompanyService(self.db).get_company(), year)

    def write(self, path, year: int) -> Path:
        """Write the SIE4 file for a year in the PC8 (CP437) character set.

        Characters CP437 cannot represent are replaced with '?'.

        Args:
            path: Target file; a directory gets the default file name
            year: Fiscal year

        Returns:
            Path of the written file
        """
        lines = self.build_lines(year)
        target = Path(path)
        if target.is_dir():
            target = self.default_path(year, target)
        with open(target, "w", encoding=SIE_ENCODING, errors="replace", newline="") as handle:
            handle.write(LINE_ENDING.join(lines) + LINE_ENDING)
        self._logger.info("sie_exported", path=str(target), year=year, lines=len(lines))
        return target
