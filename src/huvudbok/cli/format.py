"""Output formatting helpers shared by commands."""

from decimal import Decimal


def format_amount(amount: Decimal | None) -> str:
    """Format an amount Swedish style: space thousands, comma decimals."""
    if amount is None:
        return ""
    text = f"{amount:,.2f}"
    return text.replace(",", " ").replace(".", ",")
