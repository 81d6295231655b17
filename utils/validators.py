import math
from typing import Any

from models.enums import Category
from models.record import ValidationError

def parse_positive_number(value: Any, field_name: str = "value") -> float:
    """Положительное конечное число из пользовательского ввода"""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name}: введите положительное число")
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name}: введите положительное число")
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name}: введите положительное число")
    return number

def parse_quantitative_category(value: Any) -> Category:
    try:
        category = value if isinstance(value, Category) else Category(str(value).lower())
    except ValueError:
        raise ValidationError(f"Неизвестная категория: {value!r}")
    if not category.is_quantitative:
        raise ValidationError(f"Категория {category.value} не поддерживает цели и прогресс")
    return category
