# models/enums.py

from enum import Enum


class Category(Enum):
    ACADEMIC = "academic"
    PHYSICAL = "physical"
    CHARACTER = "character"
    MINDSET = "mindset"

    @property
    def is_quantitative(self) -> bool:
        return self is not Category.MINDSET

    @property
    def unit(self) -> str:
        return CATEGORY_UNITS[self]


CATEGORY_UNITS = {
    Category.ACADEMIC: "Hrs",
    Category.PHYSICAL: "Min",
    Category.CHARACTER: "Pages",
    Category.MINDSET: "Affirmed",
}

QUANTITATIVE_CATEGORIES = (Category.ACADEMIC, Category.PHYSICAL, Category.CHARACTER)


class Period(Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class WindowDesignation(Enum):
    CURRENT = "current"
    PREVIOUS = "previous"


class TrendDirection(Enum):
    UP = "up"
    FLAT = "flat"
    DOWN = "down"


class MindsetStatus(Enum):
    UNTOGGLED = "Untoggled"
    AFFIRMED = "Affirmed"


class StatusLevel(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
