"""
Тесты форматирования значений дашборда
"""

import pytest

from booking_admin.utils import format_currency, to_number


@pytest.mark.parametrize("value, expected", [
    (None, "₹0"),
    ("", "₹0"),
    (125000, "₹125,000"),
    ("12500.50", "₹12,500.50"),
    ("abc", "₹0"),
    (True, "₹0"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_to_number_accepts_numeric_strings():
    assert to_number("42") == 42.0
    assert to_number({"amount": 1}) == 0.0
