from fastapi import APIRouter, Depends
from typing import Any, Dict
import logging

from services.tracker_session import TrackerSession
from shared.models import ActionResult, GoalUpdate, ProgressLog, StatusMessageOut
from ..dependencies import get_tracker_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tracker", tags=["tracker"])


def _result(session: TrackerSession, value: Any = None) -> Dict[str, Any]:
    last = session.notifications.last
    return ActionResult(
        value=value,
        message=StatusMessageOut(**last.to_dict()) if last else None,
        today=session.today_view(),
    ).model_dump()


@router.get("/today", response_model=Dict[str, Any])
async def get_today(session: TrackerSession = Depends(get_tracker_session)):
    """
    Запись текущего дня с текстами карточек
    """
    return session.today_view()


@router.post("/goal", response_model=ActionResult)
async def update_goal(payload: GoalUpdate, session: TrackerSession = Depends(get_tracker_session)):
    goal = session.update_goal(payload.category.value, payload.goal)
    return _result(session, goal)


@router.post("/progress", response_model=ActionResult)
async def log_progress(payload: ProgressLog, session: TrackerSession = Depends(get_tracker_session)):
    progress = session.update_tracker(payload.category.value, payload.amount)
    return _result(session, progress)


@router.post("/mindset/toggle", response_model=ActionResult)
async def toggle_mindset(session: TrackerSession = Depends(get_tracker_session)):
    return _result(session, session.toggle_mindset())


@router.post("/social/toggle", response_model=ActionResult)
async def toggle_social_check(session: TrackerSession = Depends(get_tracker_session)):
    return _result(session, session.toggle_social_check())


@router.post("/reset", response_model=ActionResult)
async def reset_daily_progress(session: TrackerSession = Depends(get_tracker_session)):
    session.reset_daily_progress()
    return _result(session)


@router.get("/messages")
async def get_recent_messages(limit: int = 10, session: TrackerSession = Depends(get_tracker_session)):
    """Последние статусные уведомления"""
    return [m.to_dict() for m in session.notifications.recent(limit)]
