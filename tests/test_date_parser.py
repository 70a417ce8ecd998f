"""Tests for date and amount parsing."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from huvudbok.utils.amount_parser import parse_amount
from huvudbok.utils.date_parser import get_date_range, month_range, parse_date, year_range


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_compact_date(self):
        assert parse_date("20240115") == date(2024, 1, 15)

    @pytest.mark.parametrize("word", ["today", "idag", "TODAY "])
    def test_today(self, word):
        assert parse_date(word) == date.today()

    @pytest.mark.parametrize("word", ["yesterday", "igår"])
    def test_yesterday(self, word):
        assert parse_date(word) == date.today() - timedelta(days=1)

    def test_this_month(self):
        assert parse_date("this month") == date.today().replace(day=1)

    def test_last_year(self):
        assert parse_date("last year") == date(date.today().year - 1, 1, 1)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date")


class TestDateRanges:
    """Tests for period helpers."""

    def test_month_range_handles_leap_year(self):
        assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_range(2023, 2) == (date(2023, 2, 1), date(2023, 2, 28))

    def test_month_range_rejects_bad_month(self):
        with pytest.raises(ValueError):
            month_range(2024, 13)

    def test_year_range(self):
        assert year_range(2024) == (date(2024, 1, 1), date(2024, 12, 31))

    def test_last_month(self):
        start, end = get_date_range("last-month")
        assert start.day == 1
        assert end == date.today().replace(day=1) - timedelta(days=1)

    def test_last_year(self):
        assert get_date_range("last-year") == year_range(date.today().year - 1)

    def test_this_year_ends_today(self):
        start, end = get_date_range("this-year")
        assert start == date(date.today().year, 1, 1)
        assert end == date.today()

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("next-decade")


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("123.45", "123.45"),
            ("123,45", "123.45"),
            ("1 234,56", "1234.56"),
            ("1 234,56 kr", "1234.56"),
            ("1234 SEK", "1234"),
            ("500:-", "500"),
            ("1.234,56", "1234.56"),
            ("1,234.56", "1234.56"),
            ("-99,90", "-99.90"),
            ("(250,00)", "-250.00"),
        ],
    )
    def test_formats(self, text, expected):
        assert parse_amount(text) == Decimal(expected)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12,34,56.7.8", "NaN"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)
