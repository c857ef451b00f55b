"""Template helper functions for consistent UI rendering.

This module provides Jinja2 filters for:
- Currency formatting of integer cent amounts
- Date formatting consistency
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Union

logger = logging.getLogger(__name__)


def format_currency(cents: Union[int, str, None], symbol: str = "$") -> str:
    """Format an amount stored in cents as a dollar string.

    Examples:
        format_currency(5000)     # "$50.00"
        format_currency(123456)   # "$1,234.56"
        format_currency(None)     # "$0.00"
    """
    if cents is None:
        cents = 0

    try:
        value = Decimal(str(cents)) / 100
    except (ValueError, TypeError, InvalidOperation):
        logger.warning(f"Invalid currency value: {cents}, using 0")
        value = Decimal("0")

    return f"{symbol}{value:,.2f}"


def format_date(
    date_value: Union[datetime, date, None], format_str: str = "%b %d, %Y"
) -> str:
    """Format a date for listings.

    Examples:
        format_date(date(2024, 1, 15))  # "Jan 15, 2024"
        format_date(None)               # ""
    """
    if not date_value:
        return ""
    return date_value.strftime(format_str)


def register_template_helpers(app) -> None:
    """Expose the helpers to Jinja as filters."""
    app.jinja_env.filters.update(
        {
            "currency": format_currency,
            "date_display": format_date,
        }
    )
