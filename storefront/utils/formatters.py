"""Utility functions for formatting and display."""

from storefront.config.settings import settings


def format_amount(amount: float) -> str:
    """
    Format a number with thousands separators.

    Whole amounts drop the decimal part, fractional ones keep up to two
    decimals (1000 -> "1,000", 1250.5 -> "1,250.5").

    Args:
        amount: Numeric amount

    Returns:
        Formatted amount string
    """
    if amount is None:
        return "0"
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}".rstrip("0").rstrip(".")


def format_price(amount: float, currency: str | None = None) -> str:
    """
    Format a price with its currency label.

    Args:
        amount: Price value
        currency: Currency label; defaults to settings.currency

    Returns:
        Formatted price string, e.g. "TZS 25,000"
    """
    return f"{currency or settings.currency} {format_amount(amount)}"
