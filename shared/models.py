from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any
from enum import Enum

# Базовые перечисления
class CategoryName(str, Enum):
    ACADEMIC = "academic"
    PHYSICAL = "physical"
    CHARACTER = "character"

class PeriodName(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

# Запросы трекера
class GoalUpdate(BaseModel):
    category: CategoryName
    goal: float = Field(..., gt=0, description="Новая цель на день")

    @field_validator('goal')
    @classmethod
    def validate_goal(cls, v):
        if v in (float('inf'), float('-inf')):
            raise ValueError('Цель должна быть конечным числом')
        return v

class ProgressLog(BaseModel):
    category: CategoryName
    amount: float = Field(..., gt=0, description="Добавленный прогресс")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        if v in (float('inf'), float('-inf')):
            raise ValueError('Прогресс должен быть конечным числом')
        return v

# Ответы трекера
class StatusMessageOut(BaseModel):
    text: str
    level: str
    created_at: str

class ActionResult(BaseModel):
    success: bool = True
    value: Optional[Any] = None
    message: Optional[StatusMessageOut] = None
    today: Dict[str, Any]

class PeriodSelect(BaseModel):
    period: PeriodName

# Графики и сводка
class ChartSeriesOut(BaseModel):
    currentSeries: List[Optional[float]]
    previousSeries: List[Optional[float]]
    labels: List[str]

class SummaryOut(BaseModel):
    currentLabel: str
    previousLabel: str
    currentAvg: int
    previousAvg: int
    delta: int
    direction: str

class WindowOut(BaseModel):
    start: str
    end: str
    length: int
    designation: str

class AnalysisOut(BaseModel):
    generation: int
    period: PeriodName
    windows: Dict[str, WindowOut]
    summary: SummaryOut
    categories: Dict[str, Dict[str, int]]
    mindset: Dict[str, int]
    charts: Dict[str, ChartSeriesOut]

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
