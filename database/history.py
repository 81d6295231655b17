# database/history.py

import logging
from datetime import date
from typing import Any, Dict, Optional

from models.record import DailyRecord, materialize
from utils.datetime_utils import DateLike, parse_date_key, to_date_key

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    История пользователя: ключ дня (YYYY-MM-DD) -> DailyRecord.

    Единственный источник данных для анализа. Растёт только через
    upsert_today(); прошлые дни не удаляются и не изменяются.
    Записи хранятся в том виде, в каком пришли из документа
    (частичные словари), materialize() применяется при чтении.
    """

    def __init__(self, entries: Optional[Dict[str, Dict[str, Any]]] = None):
        self._entries: Dict[date, Dict[str, Any]] = {}
        if entries:
            self._load(entries)

    def _load(self, entries: Dict[str, Dict[str, Any]]) -> None:
        for key, stored in entries.items():
            try:
                day = parse_date_key(key)
            except ValueError:
                logger.warning(f"⚠️ Пропущен некорректный ключ истории: {key!r}")
                continue
            if not isinstance(stored, dict):
                logger.warning(f"⚠️ Пропущена некорректная запись за {key}")
                continue
            self._entries[day] = stored

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> "HistoryStore":
        """Загрузка из документа хранилища {history: {...}}"""
        if not document:
            return cls()
        if not isinstance(document, dict):
            logger.warning("⚠️ Документ истории не является словарём")
            return cls()
        history = document.get("history") or {}
        if not isinstance(history, dict):
            logger.warning("⚠️ Поле history документа не является словарём")
            return cls()
        return cls(history)

    def to_document(self) -> Dict[str, Any]:
        return {"history": self.to_dict()}

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {to_date_key(day): dict(stored) for day, stored in sorted(self._entries.items())}

    # === ЧТЕНИЕ ===

    def record_on(self, key: DateLike) -> Optional[DailyRecord]:
        """Материализованная запись дня или None, если данных нет"""
        day = parse_date_key(key) if isinstance(key, str) else key
        stored = self._entries.get(day)
        if stored is None:
            return None
        return materialize(stored, to_date_key(day))

    def stored_on(self, key: DateLike) -> Optional[Dict[str, Any]]:
        day = parse_date_key(key) if isinstance(key, str) else key
        return self._entries.get(day)

    def earliest_key(self) -> Optional[str]:
        # Сравнение по датам, а не по строкам
        if not self._entries:
            return None
        return to_date_key(min(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    # === ЗАПИСЬ ===

    def upsert_today(self, record: DailyRecord, today: DateLike) -> None:
        """Заменяет запись текущего дня"""
        day = parse_date_key(today) if isinstance(today, str) else today
        key = to_date_key(day)
        if record.date is not None and record.date != key:
            raise ValueError(f"Запись за {record.date} нельзя сохранить как {key}")
        record.date = key
        self._entries[day] = record.to_dict()
