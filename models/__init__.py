#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Models Package
Модели данных трекера: категории, запись дня, результаты анализа
"""

from .enums import (
    Category,
    Period,
    WindowDesignation,
    TrendDirection,
    MindsetStatus,
    StatusLevel,
    QUANTITATIVE_CATEGORIES,
)

from .record import (
    ValidationError,
    GoalProgress,
    MindsetEntry,
    DailyRecord,
    DEFAULT_GOALS,
    default_record,
    materialize,
    completion,
    reset_progress,
)

from .analytics import (
    AnalysisWindow,
    DayPerformance,
    WindowAverages,
    CategorySeries,
    AnalysisResult,
)

__all__ = [
    # Enums
    'Category',
    'Period',
    'WindowDesignation',
    'TrendDirection',
    'MindsetStatus',
    'StatusLevel',
    'QUANTITATIVE_CATEGORIES',

    # Daily record
    'ValidationError',
    'GoalProgress',
    'MindsetEntry',
    'DailyRecord',
    'DEFAULT_GOALS',
    'default_record',
    'materialize',
    'completion',
    'reset_progress',

    # Analytics
    'AnalysisWindow',
    'DayPerformance',
    'WindowAverages',
    'CategorySeries',
    'AnalysisResult',
]
