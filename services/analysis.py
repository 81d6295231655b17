#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Analysis Engine
Сравнение текущего и предыдущего периодов по истории пользователя

Движок является чистой функцией от (история, период, сегодня):
никакого скрытого состояния, повторный вызов даёт тот же результат.

Этапы:
    1. размеры окон (week / month / year / all);
    2. выполнение по дням, включая дни без записи;
    3. средние по категориям и общее среднее;
    4. дельта округлённых общих средних;
    5. выровненные ряды для графиков.
"""

import logging
import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple, Union

from database.history import HistoryStore
from models.analytics import (
    AnalysisResult,
    AnalysisWindow,
    CategorySeries,
    DayPerformance,
    WindowAverages,
)
from models.enums import Category, Period, QUANTITATIVE_CATEGORIES, TrendDirection, WindowDesignation
from models.record import materialize
from utils.datetime_utils import DateLike, days_between, format_day_label, to_date

logger = logging.getLogger(__name__)

PERIOD_LENGTHS: Dict[Period, int] = {
    Period.WEEK: 7,
    Period.MONTH: 30,
    Period.YEAR: 365,
}

# Пропуск на графике (не ноль)
GAP = None


def round_half_up(value: float) -> int:
    """Округление до целого с половиной вверх (44.5 -> 45)"""
    return int(math.floor(value + 0.5))


def parse_period(period: Union[Period, str]) -> Period:
    if isinstance(period, Period):
        return period
    try:
        return Period(str(period).lower())
    except ValueError:
        valid = [p.value for p in Period]
        raise ValueError(f"Период должен быть одним из: {valid}")

# ===== ШАГ 1: ОКНА =====

def window_lengths(store: HistoryStore, period: Period, today: date) -> Tuple[int, int]:
    """Длины текущего и предыдущего окна в днях"""
    if period is not Period.ALL:
        length = PERIOD_LENGTHS[period]
        return length, length

    first_key = store.earliest_key()
    if first_key is None:
        return 1, 0

    total_days = days_between(first_key, today) + 1
    if total_days < 1:
        # В истории только будущие дни
        logger.warning(f"⚠️ Самая ранняя запись {first_key} позже сегодняшнего дня")
        return 1, 0

    return math.ceil(total_days / 2), total_days // 2


def resolve_windows(store: HistoryStore, period: Union[Period, str],
                    today: DateLike) -> Tuple[AnalysisWindow, AnalysisWindow]:
    """Текущее окно заканчивается сегодня, предыдущее - за день до начала текущего"""
    period = parse_period(period)
    today = to_date(today)
    current_length, previous_length = window_lengths(store, period, today)

    current = AnalysisWindow.ending_on(today, current_length, WindowDesignation.CURRENT)
    previous = AnalysisWindow.ending_on(
        current.start - timedelta(days=1), previous_length, WindowDesignation.PREVIOUS
    )
    return current, previous

# ===== ШАГ 2: ВЫПОЛНЕНИЕ ПО ДНЯМ =====

def daily_performance(store: HistoryStore, window: AnalysisWindow) -> List[DayPerformance]:
    performances = []
    for day in window.days():
        record = materialize(store.stored_on(day))
        performances.append(DayPerformance(
            date=day,
            completions={c: record.completion(c) for c in QUANTITATIVE_CATEGORIES},
            mindset=record.mindset.is100,
        ))
    return performances

# ===== ШАГ 3: АГРЕГАЦИЯ =====

def aggregate(performances: List[DayPerformance]) -> WindowAverages:
    days = len(performances)
    if days == 0:
        return WindowAverages(
            category_averages={c: 0.0 for c in QUANTITATIVE_CATEGORIES},
            overall_average=0.0,
            days=0,
            mindset_rate=0.0,
        )

    category_averages = {
        c: sum(p.completions[c] for p in performances) / days
        for c in QUANTITATIVE_CATEGORIES
    }
    overall = sum(category_averages.values()) / len(category_averages)
    affirmed = sum(1 for p in performances if p.mindset)

    return WindowAverages(
        category_averages=category_averages,
        overall_average=overall,
        days=days,
        mindset_rate=100.0 * affirmed / days,
    )

# ===== ШАГ 4: ДЕЛЬТА =====

def compute_delta(current: WindowAverages, previous: WindowAverages) -> int:
    return round_half_up(current.overall_average) - round_half_up(previous.overall_average)


def trend_direction(delta: int) -> TrendDirection:
    if delta > 0:
        return TrendDirection.UP
    if delta < 0:
        return TrendDirection.DOWN
    return TrendDirection.FLAT

# ===== ШАГ 5: РЯДЫ =====

def build_series(current: List[DayPerformance],
                 previous: List[DayPerformance]) -> Dict[Category, CategorySeries]:
    """
    Ряды длиной текущего окна. Предыдущий ряд обрезается или дополняется
    в конце пропусками (GAP), подписи берутся из дат текущего окна.
    """
    points = len(current)
    labels = [format_day_label(p.date) for p in current]

    series = {}
    for category in QUANTITATIVE_CATEGORIES:
        previous_values: List[Optional[float]] = [p.completions[category] for p in previous[:points]]
        previous_values.extend([GAP] * (points - len(previous_values)))
        series[category] = CategorySeries(
            category=category,
            current=[p.completions[category] for p in current],
            previous=previous_values,
            labels=list(labels),
        )
    return series

# ===== ТОЧКА ВХОДА =====

def analyze(store: HistoryStore, period: Union[Period, str], today: DateLike) -> AnalysisResult:
    """Полный анализ периода для истории пользователя"""
    period = parse_period(period)
    today = to_date(today)

    current_window, previous_window = resolve_windows(store, period, today)
    current_days = daily_performance(store, current_window)
    previous_days = daily_performance(store, previous_window)

    current = aggregate(current_days)
    previous = aggregate(previous_days)
    delta = compute_delta(current, previous)

    return AnalysisResult(
        period=period,
        today=today,
        current_window=current_window,
        previous_window=previous_window,
        current=current,
        previous=previous,
        delta=delta,
        direction=trend_direction(delta),
        series=build_series(current_days, previous_days),
    )
