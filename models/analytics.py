# models/analytics.py

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from models.enums import Category, Period, TrendDirection, WindowDesignation
from utils.datetime_utils import date_range, to_date_key


@dataclass(frozen=True)
class AnalysisWindow:
    """Непрерывный диапазон дней [start, end] включительно"""
    start: date
    end: date
    length: int
    designation: WindowDesignation

    @classmethod
    def ending_on(cls, end: date, length: int, designation: WindowDesignation) -> "AnalysisWindow":
        length = max(0, length)
        start = end - timedelta(days=length - 1)
        return cls(start=start, end=end, length=length, designation=designation)

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def days(self) -> List[date]:
        if self.is_empty:
            return []
        return list(date_range(self.start, self.end))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": to_date_key(self.start),
            "end": to_date_key(self.end),
            "length": self.length,
            "designation": self.designation.value,
        }


@dataclass
class DayPerformance:
    date: date
    completions: Dict[Category, float]
    mindset: bool = False


@dataclass
class WindowAverages:
    category_averages: Dict[Category, float]
    overall_average: float = 0.0
    days: int = 0
    mindset_rate: float = 0.0  # справочно, в overall не входит

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_averages": {c.value: v for c, v in self.category_averages.items()},
            "overall_average": self.overall_average,
            "days": self.days,
            "mindset_rate": self.mindset_rate,
        }


@dataclass
class CategorySeries:
    category: Category
    current: List[Optional[float]] = field(default_factory=list)
    previous: List[Optional[float]] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    period: Period
    today: date
    current_window: AnalysisWindow
    previous_window: AnalysisWindow
    current: WindowAverages
    previous: WindowAverages
    delta: int
    direction: TrendDirection
    series: Dict[Category, CategorySeries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period.value,
            "today": to_date_key(self.today),
            "current_window": self.current_window.to_dict(),
            "previous_window": self.previous_window.to_dict(),
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "delta": self.delta,
            "direction": self.direction.value,
        }
