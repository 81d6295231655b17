#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Date Utilities
Календарные ключи дней, диапазоны дат и арифметика в целых днях

Все вычисления ведутся в целых календарных днях одной временной зоны,
время суток не используется нигде.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

import pytz

DATE_KEY_FORMAT = "%Y-%m-%d"

DateLike = Union[date, str]


def get_timezone(tz_name: Optional[str]):
    """Возвращает pytz-зону или None для локальной зоны хоста"""
    if not tz_name:
        return None
    return pytz.timezone(tz_name)


def today(tz_name: Optional[str] = None) -> date:
    tz = get_timezone(tz_name)
    if tz is None:
        return datetime.now().date()
    return datetime.now(tz).date()


def today_key(tz_name: Optional[str] = None) -> str:
    """Ключ текущего календарного дня (YYYY-MM-DD)"""
    return to_date_key(today(tz_name))


def parse_date_key(key: str) -> date:
    """Строгий разбор ключа YYYY-MM-DD"""
    if not isinstance(key, str) or len(key) != 10:
        raise ValueError(f"Неверный ключ даты: {key!r}")
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def to_date_key(value: DateLike) -> str:
    return to_date(value).strftime(DATE_KEY_FORMAT)


def shift(value: DateLike, days: int) -> date:
    return to_date(value) + timedelta(days=days)


def days_between(a: DateLike, b: DateLike) -> int:
    """Разница b - a в целых днях (может быть отрицательной)"""
    return (to_date(b) - to_date(a)).days


def date_range(start: DateLike, end: DateLike) -> Iterator[date]:
    """
    Все дни от start до end включительно по возрастанию.

    При start > end диапазон пуст.
    """
    current = to_date(start)
    last = to_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def format_day_label(value: DateLike) -> str:
    """Подпись точки графика, например 'Jan 1'"""
    d = to_date(value)
    return f"{d.strftime('%b')} {d.day}"


def format_long_date(value: DateLike) -> str:
    """Заголовок дня, например 'Mon, Jan 1, 2024'"""
    d = to_date(value)
    return f"{d.strftime('%a, %b')} {d.day}, {d.year}"
