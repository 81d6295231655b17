#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Chart Presenter
Преобразование результата анализа в ряды графиков и сводку

Своей логики не содержит: только округление для отображения,
подписи периодов и раскладка данных под клиент графиков.
"""

from typing import Any, Dict, List, Optional, Tuple

from models.analytics import AnalysisResult
from models.enums import Period, QUANTITATIVE_CATEGORIES
from services.analysis import round_half_up

PERIOD_LABELS: Dict[Period, Tuple[str, str]] = {
    Period.WEEK: ("This Week", "Last Week"),
    Period.MONTH: ("Last 30 Days", "Previous 30 Days"),
    Period.YEAR: ("Last 365 Days", "Previous 365 Days"),
    Period.ALL: ("Recent Half", "Earlier Half"),
}

SERIES_PRECISION = 2


def period_labels(period: Period) -> Tuple[str, str]:
    return PERIOD_LABELS[period]


def _chart_points(values: List[Optional[float]]) -> List[Optional[float]]:
    # None остаётся пропуском, а не нулём
    return [None if v is None else round(v, SERIES_PRECISION) for v in values]


def build_chart_series(result: AnalysisResult) -> Dict[str, Dict[str, Any]]:
    """По категории: {currentSeries, previousSeries, labels}"""
    charts = {}
    for category in QUANTITATIVE_CATEGORIES:
        series = result.series[category]
        charts[category.value] = {
            "currentSeries": _chart_points(series.current),
            "previousSeries": _chart_points(series.previous),
            "labels": list(series.labels),
        }
    return charts


def build_summary(result: AnalysisResult) -> Dict[str, Any]:
    current_label, previous_label = period_labels(result.period)
    return {
        "currentLabel": current_label,
        "previousLabel": previous_label,
        "currentAvg": round_half_up(result.current.overall_average),
        "previousAvg": round_half_up(result.previous.overall_average),
        "delta": result.delta,
        "direction": result.direction.value,
    }


def build_category_summary(result: AnalysisResult) -> Dict[str, Dict[str, int]]:
    return {
        category.value: {
            "currentAvg": round_half_up(result.current.category_averages[category]),
            "previousAvg": round_half_up(result.previous.category_averages[category]),
        }
        for category in QUANTITATIVE_CATEGORIES
    }


class ChartPresenter:
    """
    Отдаёт полезную нагрузку для отрисовки.

    Каждый present() возвращает полный снимок; клиент заменяет
    предыдущий график целиком, а не патчит его.
    """

    def present(self, result: AnalysisResult, generation: int = 0) -> Dict[str, Any]:
        return {
            "generation": generation,
            "period": result.period.value,
            "windows": {
                "current": result.current_window.to_dict(),
                "previous": result.previous_window.to_dict(),
            },
            "summary": build_summary(result),
            "categories": build_category_summary(result),
            "mindset": {
                "currentRate": round_half_up(result.current.mindset_rate),
                "previousRate": round_half_up(result.previous.mindset_rate),
            },
            "charts": build_chart_series(result),
        }
