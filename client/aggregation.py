"""
Агрегати над записами, що вже завантажені в клієнт.

Нічого не зберігається: підсумки щоразу рахуються з поточних списків.
Записи - це словники у форматі відповіді API (або об'єкти з тими ж атрибутами).
"""

import datetime
import math
from typing import Any, Iterable

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
HISTORY_LIMIT = 3


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def coerce_amount(value: Any) -> float:
    """Сума запису як число; відсутнє або нечислове значення дає 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def created_at(record: Any) -> datetime.datetime:
    value = _field(record, "created_at")
    if isinstance(value, str):
        try:
            value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return EPOCH
    if not isinstance(value, datetime.datetime):
        return EPOCH
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value


def _total(records: Iterable[Any]) -> float:
    return sum((coerce_amount(_field(r, "amount")) for r in records if r), 0.0)


def total_income(incomes: Iterable[Any]) -> float:
    return _total(incomes)


def total_expenses(expenses: Iterable[Any]) -> float:
    return _total(expenses)


def total_balance(incomes: Iterable[Any], expenses: Iterable[Any]) -> float:
    return total_income(incomes) - total_expenses(expenses)


def transaction_history(incomes: Iterable[Any], expenses: Iterable[Any], limit: int = HISTORY_LIMIT) -> list:
    """
    Останні транзакції (доходи і витрати разом), новіші спочатку.
    Сортування стабільне: при однаковому часі доходи йдуть перед витратами.
    """
    history = [r for r in [*incomes, *expenses] if r]
    history.sort(key=created_at, reverse=True)
    return history[:limit]
