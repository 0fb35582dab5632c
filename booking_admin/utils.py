"""
Утилиты для отображения данных backend
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def to_number(value: Any) -> float:
    """
    Привести числовое поле ответа к float.

    Backend отдаёт null для SUM по пустой выборке и строки для
    numeric колонок; всё нечисловое считается нулём.
    """
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Unexpected numeric value from API: {value!r}")
        return 0.0


def format_currency(value: Any, symbol: str = "₹") -> str:
    """Сумма с разделителями тысяч; целые суммы без копеек"""
    amount = to_number(value)
    if amount.is_integer():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{amount:,.2f}"
