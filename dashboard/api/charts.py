#!/usr/bin/env python3
"""
Charts API для GrowthTracker Dashboard
Данные графиков и сводка сравнения периодов
"""

import logging

from fastapi import APIRouter, Depends, Query

from services.tracker_session import TrackerSession
from shared.models import AnalysisOut, PeriodName, PeriodSelect
from ..dependencies import get_tracker_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charts", tags=["charts"])


@router.get("/analysis", response_model=AnalysisOut)
async def get_analysis(
    period: PeriodName = Query(PeriodName.WEEK, description="Период сравнения"),
    session: TrackerSession = Depends(get_tracker_session),
):
    """
    Текущий период против предыдущего: сводка и ряды по категориям.

    Только чтение: активный период сессии не меняется.
    """
    return session.snapshot(period.value)


@router.post("/period", response_model=AnalysisOut)
async def set_period(payload: PeriodSelect, session: TrackerSession = Depends(get_tracker_session)):
    """Смена активного периода и полная перерисовка"""
    return session.set_analysis_period(payload.period.value)


@router.get("/current", response_model=AnalysisOut)
async def get_current_render(session: TrackerSession = Depends(get_tracker_session)):
    """Последний снимок для активного периода"""
    return session.last_render or session.render()
