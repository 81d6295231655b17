# ui/progress.py

from typing import Any, Dict

from models.enums import Category, QUANTITATIVE_CATEGORIES
from models.record import DailyRecord, GoalProgress
from services.analysis import round_half_up
from ui.messages import format_amount
from utils.datetime_utils import format_long_date


def progress_bar(percent: int, length: int = 12):
    """Генерирует текстовый progress bar (emoji/блоки)"""
    percent = max(0, min(100, percent))
    done = int(length * percent // 100)
    todo = length - done
    return "🟩" * done + "⬜️" * todo + f" {percent}%"


def progress_text(entry: GoalProgress) -> str:
    """'3 / 2 (100%)'"""
    percent = round_half_up(entry.completion)
    return f"{format_amount(entry.progress)} / {format_amount(entry.goal)} ({percent}%)"


def mindset_button_text(is100: bool) -> str:
    return "BELIEVE 100% Locked" if is100 else "Affirm Belief"


def mindset_badge_text(is100: bool) -> str:
    return "Mindset is Locked In!" if is100 else "Awaiting Affirmation"


def social_check_text(done: bool) -> str:
    return "✓ Done!" if done else "✓"


def tracker_cards(record: DailyRecord) -> Dict[str, Any]:
    """Данные карточек трекера на сегодня"""
    cards: Dict[str, Any] = {}
    for category in QUANTITATIVE_CATEGORIES:
        entry = record.entry(category)
        card = {
            "progress": entry.progress,
            "goal": entry.goal,
            "unit": category.unit,
            "percent": entry.completion,
            "text": progress_text(entry),
            "bar": progress_bar(round_half_up(entry.completion)),
            "reached": entry.is_reached,
        }
        if category is Category.CHARACTER:
            card["social_check"] = bool(entry.social_check)
            card["social_check_text"] = social_check_text(bool(entry.social_check))
        cards[category.value] = card

    cards[Category.MINDSET.value] = {
        "is100": record.mindset.is100,
        "status": record.mindset.status.value,
        "unit": Category.MINDSET.unit,
        "button": mindset_button_text(record.mindset.is100),
        "badge": mindset_badge_text(record.mindset.is100),
    }
    return {
        "date": record.date,
        "date_display": format_long_date(record.date) if record.date else None,
        "cards": cards,
    }
