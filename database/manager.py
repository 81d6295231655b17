#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Document Store
Хранилище документов пользователей: {history: {YYYY-MM-DD: DailyRecord}}

Один документ на пользователя. Запись заменяет документ целиком
(last writer wins), подписчики получают полный документ после
каждого изменения.
"""

import copy
import json
import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
ChangeListener = Callable[[Optional[Document]], None]
ErrorListener = Callable[[Exception], None]

USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]{1,128}$")

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class DatabaseReadError(DatabaseError):
    """Ошибка чтения документа"""
    pass

class DatabaseWriteError(DatabaseError):
    """Ошибка записи документа"""
    pass

# ===== BASE STORE =====

class DocumentStore(ABC):
    """Интерфейс хранилища с подпиской на изменения"""

    def __init__(self):
        self._listeners: Dict[str, List[Tuple[ChangeListener, Optional[ErrorListener]]]] = {}
        self._lock = threading.RLock()

    @abstractmethod
    def _read(self, user_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    def _write(self, user_id: str, document: Document) -> None:
        ...

    def read(self, user_id: str) -> Optional[Document]:
        """Документ пользователя или None, если его ещё нет"""
        validate_user_id(user_id)
        return self._read(user_id)

    def write(self, user_id: str, document: Document) -> None:
        """Полная замена документа пользователя"""
        validate_user_id(user_id)
        if not isinstance(document, dict) or not isinstance(document.get("history"), dict):
            raise DatabaseWriteError("Документ должен содержать словарь history")
        self._write(user_id, copy.deepcopy(document))
        logger.debug(f"💾 Документ пользователя {user_id} сохранён")
        self._notify(user_id)

    def subscribe(self, user_id: str, on_change: ChangeListener,
                  on_error: Optional[ErrorListener] = None) -> Callable[[], None]:
        """
        Подписка на документ пользователя.

        Текущий документ доставляется сразу, затем после каждой записи.
        Возвращает функцию отписки.
        """
        validate_user_id(user_id)
        entry = (on_change, on_error)
        with self._lock:
            self._listeners.setdefault(user_id, []).append(entry)

        self._deliver(user_id, entry)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(user_id, [])
                if entry in listeners:
                    listeners.remove(entry)

        return unsubscribe

    def _notify(self, user_id: str) -> None:
        with self._lock:
            listeners = list(self._listeners.get(user_id, []))
        for entry in listeners:
            self._deliver(user_id, entry)

    def _deliver(self, user_id: str, entry: Tuple[ChangeListener, Optional[ErrorListener]]) -> None:
        on_change, on_error = entry
        try:
            document = self._read(user_id)
        except DatabaseError as e:
            logger.error(f"❌ Ошибка подписки на документ {user_id}: {e}")
            if on_error:
                on_error(e)
            return
        on_change(copy.deepcopy(document))


def validate_user_id(user_id: str) -> str:
    if not isinstance(user_id, str) or not USER_ID_PATTERN.match(user_id):
        raise DatabaseError(f"Некорректный идентификатор пользователя: {user_id!r}")
    return user_id

# ===== IMPLEMENTATIONS =====

class JsonDocumentStore(DocumentStore):
    """Документы в JSON файлах: <data_dir>/<collection>/user_<id>.json"""

    def __init__(self, data_dir: Path, collection: str = "userGrowthHistory"):
        super().__init__()
        self.data_dir = Path(data_dir) / collection
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _user_file(self, user_id: str) -> Path:
        return self.data_dir / f"user_{user_id}.json"

    def _read(self, user_id: str) -> Optional[Document]:
        path = self._user_file(user_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DatabaseReadError(f"Не удалось прочитать {path.name}: {e}") from e
        if not isinstance(document, dict):
            raise DatabaseReadError(f"{path.name}: документ должен быть JSON-объектом")
        return document

    def _write(self, user_id: str, document: Document) -> None:
        path = self._user_file(user_id)
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, path)
        except (OSError, TypeError, ValueError) as e:
            temp_path.unlink(missing_ok=True)
            raise DatabaseWriteError(f"Не удалось сохранить {path.name}: {e}") from e


class MemoryDocumentStore(DocumentStore):
    """Хранилище в памяти процесса"""

    def __init__(self, documents: Optional[Dict[str, Document]] = None):
        super().__init__()
        self._documents: Dict[str, Document] = copy.deepcopy(documents) if documents else {}

    def _read(self, user_id: str) -> Optional[Document]:
        return copy.deepcopy(self._documents.get(user_id))

    def _write(self, user_id: str, document: Document) -> None:
        self._documents[user_id] = document
