#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Daily Record Model
Запись одного дня по категориям и правила заполнения по умолчанию

Таблица значений по умолчанию (DEFAULT_GOALS):

    academic   progress 0, goal 2   (Hrs)
    physical   progress 0, goal 30  (Min)
    character  progress 0, goal 10  (Pages), socialCheck False
    mindset    is100 False          (Affirmed)

Правила materialize():
    * отсутствующая категория берётся из таблицы целиком;
    * сохранённая категория заменяет значение по умолчанию целиком,
      кроме goal: нулевая, отрицательная, нечисловая или отсутствующая
      цель заменяется целью категории по умолчанию;
    * отсутствующий или некорректный progress становится 0;
    * socialCheck / is100 считаются True только для настоящего True.
"""

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from models.enums import Category, MindsetStatus, QUANTITATIVE_CATEGORIES

# ===== EXCEPTIONS =====

class ValidationError(Exception):
    """Ошибка валидации пользовательского ввода"""
    pass

# ===== DEFAULTS =====

DEFAULT_GOALS: Dict[Category, float] = {
    Category.ACADEMIC: 2.0,
    Category.PHYSICAL: 30.0,
    Category.CHARACTER: 10.0,
}

MAX_COMPLETION = 100.0


def _as_number(value: Any) -> Optional[float]:
    """Число из сохранённого значения или None"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return None


def _plain(value: float):
    # 2.0 -> 2 в документе, как хранил исходный клиент
    return int(value) if float(value).is_integer() else value

# ===== MODELS =====

@dataclass
class GoalProgress:
    """Прогресс количественной категории за день"""
    goal: float
    progress: float = 0.0
    social_check: Optional[bool] = None  # только для character

    @property
    def completion(self) -> float:
        """Процент выполнения цели в диапазоне [0, 100]"""
        if self.goal is None or self.goal <= 0:
            return 0.0
        percent = 100.0 * self.progress / self.goal
        return max(0.0, min(MAX_COMPLETION, percent))

    @property
    def is_reached(self) -> bool:
        return self.completion >= MAX_COMPLETION

    def to_dict(self) -> Dict[str, Any]:
        data = {"progress": _plain(self.progress), "goal": _plain(self.goal)}
        if self.social_check is not None:
            data["socialCheck"] = self.social_check
        return data


@dataclass
class MindsetEntry:
    """Ежедневное утверждение (без накопления)"""
    is100: bool = False

    @property
    def status(self) -> MindsetStatus:
        return MindsetStatus.AFFIRMED if self.is100 else MindsetStatus.UNTOGGLED

    @property
    def completion(self) -> float:
        return MAX_COMPLETION if self.is100 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "is100": self.is100}


def _default_entry(category: Category) -> GoalProgress:
    return GoalProgress(
        goal=DEFAULT_GOALS[category],
        progress=0.0,
        social_check=False if category is Category.CHARACTER else None,
    )


@dataclass
class DailyRecord:
    """Запись дня: три количественные категории и mindset"""
    date: Optional[str] = None
    academic: GoalProgress = field(default_factory=lambda: _default_entry(Category.ACADEMIC))
    physical: GoalProgress = field(default_factory=lambda: _default_entry(Category.PHYSICAL))
    character: GoalProgress = field(default_factory=lambda: _default_entry(Category.CHARACTER))
    mindset: MindsetEntry = field(default_factory=MindsetEntry)

    def entry(self, category: Category) -> GoalProgress:
        if not category.is_quantitative:
            raise ValidationError(f"{category.value} не является количественной категорией")
        return getattr(self, category.value)

    def completion(self, category: Category) -> float:
        if category is Category.MINDSET:
            return self.mindset.completion
        return self.entry(category).completion

    # === МУТАЦИИ (только для записи текущего дня) ===

    def add_progress(self, category: Category, amount: float) -> float:
        """Добавляет прогресс и возвращает новое значение"""
        if amount is None or amount <= 0:
            raise ValidationError("Прогресс должен быть положительным числом")
        entry = self.entry(category)
        entry.progress += amount
        return entry.progress

    def set_goal(self, category: Category, goal: float) -> float:
        if goal is None or goal <= 0:
            raise ValidationError("Цель должна быть положительным числом")
        self.entry(category).goal = goal
        return goal

    def toggle_social_check(self) -> bool:
        self.character.social_check = not bool(self.character.social_check)
        return self.character.social_check

    def toggle_mindset(self) -> bool:
        self.mindset.is100 = not self.mindset.is100
        return self.mindset.is100

    def copy(self) -> "DailyRecord":
        return copy.deepcopy(self)

    # === СЕРИАЛИЗАЦИЯ ===

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            category.value: self.entry(category).to_dict()
            for category in QUANTITATIVE_CATEGORIES
        }
        data[Category.MINDSET.value] = self.mindset.to_dict()
        if self.date is not None:
            data["date"] = self.date
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], date_key: Optional[str] = None) -> "DailyRecord":
        return materialize(data, date_key)

# ===== FUNCTIONS =====

def default_record(date_key: Optional[str] = None) -> DailyRecord:
    """Базовая запись дня по таблице DEFAULT_GOALS"""
    return DailyRecord(date=date_key)


def _materialize_quantitative(category: Category, stored: Any) -> GoalProgress:
    entry = _default_entry(category)
    if not isinstance(stored, dict):
        return entry

    goal = _as_number(stored.get("goal"))
    if goal is not None and goal > 0:
        entry.goal = goal

    progress = _as_number(stored.get("progress"))
    entry.progress = progress if progress is not None and progress >= 0 else 0.0

    if category is Category.CHARACTER:
        entry.social_check = stored.get("socialCheck") is True
    return entry


def materialize(stored: Optional[Dict[str, Any]], date_key: Optional[str] = None) -> DailyRecord:
    """
    Накладывает сохранённую (возможно частичную) запись на значения по умолчанию.

    Слияние поверхностное, по категориям. materialize(None) == default_record().
    """
    if not isinstance(stored, dict):
        return default_record(date_key)

    record = default_record(date_key)
    for category in QUANTITATIVE_CATEGORIES:
        if category.value in stored:
            setattr(record, category.value, _materialize_quantitative(category, stored[category.value]))

    mindset = stored.get(Category.MINDSET.value)
    if isinstance(mindset, dict):
        record.mindset = MindsetEntry(is100=mindset.get("is100") is True)
    return record


def completion(record: Optional[DailyRecord], category: Category) -> float:
    """Процент выполнения категории за день, всегда в [0, 100]"""
    if record is None:
        record = default_record()
    return record.completion(category)


def reset_progress(record: DailyRecord, date_key: Optional[str] = None) -> DailyRecord:
    """
    Новая запись дня: прогресс обнулён, цели сохранены,
    socialCheck и is100 сброшены.
    """
    fresh = default_record(date_key if date_key is not None else record.date)
    for category in QUANTITATIVE_CATEGORIES:
        fresh.entry(category).goal = record.entry(category).goal
    return fresh
