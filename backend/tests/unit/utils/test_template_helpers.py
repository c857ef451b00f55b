from datetime import date

import pytest

from fincontrol.utils.template_helpers import format_currency, format_date


@pytest.mark.parametrize(
    "cents,expected",
    [
        (5000, "$50.00"),
        (123456, "$1,234.56"),
        (1, "$0.01"),
        (None, "$0.00"),
        ("250", "$2.50"),
        ("garbage", "$0.00"),
    ],
)
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_date():
    assert format_date(date(2024, 1, 15)) == "Jan 15, 2024"
    assert format_date(None) == ""
