#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Dashboard Dependencies
Провайдеры хранилища и сессий трекера для FastAPI приложения
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from config import config
from database.manager import DocumentStore, JsonDocumentStore
from services.auth import AuthError, AuthProvider
from services.tracker_session import TrackerSession

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ ПЕРЕМЕННЫЕ =====

# Хранилище документов (синглтон)
_document_store: Optional[DocumentStore] = None

# Реестр сессий (синглтон)
_session_registry: Optional["SessionRegistry"] = None

# ===== РЕЕСТР СЕССИЙ =====

class SessionRegistry:
    """
    Одна TrackerSession на пользователя.

    Число сессий ограничено: при переполнении закрывается сессия,
    к которой дольше всего не обращались.
    """

    def __init__(self, store: DocumentStore, max_sessions: int = 256):
        self.store = store
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, TrackerSession]" = OrderedDict()
        self._lock = threading.RLock()

    def get(self, user_id: str) -> TrackerSession:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is not None:
                self._sessions.move_to_end(user_id)
                return session

            try:
                auth = AuthProvider(user_id)
            except AuthError as e:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
            session = TrackerSession(
                self.store,
                auth=auth,
                timezone=config.analysis.timezone,
                default_period=config.analysis.default_period,
            )
            self._sessions[user_id] = session
            logger.info(f"🆕 Сессия трекера создана для {user_id}")

            while len(self._sessions) > self.max_sessions:
                evicted_id, evicted = self._sessions.popitem(last=False)
                evicted.close()
                logger.info(f"🧹 Сессия {evicted_id} закрыта по лимиту")
            return session

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def close_all(self) -> None:
        with self._lock:
            for session in self._sessions.values():
                session.close()
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

# ===== ИНИЦИАЛИЗАЦИЯ КОМПОНЕНТОВ =====

def init_components(store: Optional[DocumentStore] = None) -> SessionRegistry:
    """Инициализация хранилища и реестра сессий"""
    global _document_store, _session_registry

    if _session_registry is None or store is not None:
        if _session_registry is not None:
            _session_registry.close_all()
        _document_store = store or JsonDocumentStore(
            config.storage.data_dir, config.storage.collection
        )
        _session_registry = SessionRegistry(_document_store, config.server.max_sessions)
        logger.info("✅ Хранилище и реестр сессий инициализированы")

    return _session_registry

def cleanup_components() -> None:
    global _document_store, _session_registry
    if _session_registry is not None:
        _session_registry.close_all()
    _session_registry = None
    _document_store = None

# ===== DEPENDENCY PROVIDERS =====

def get_session_registry() -> SessionRegistry:
    if _session_registry is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Хранилище недоступно, трекер отключён"
        )
    return _session_registry

def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Идентификатор пользователя из заголовка X-User-Id"""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Требуется авторизация"
        )
    return x_user_id

async def get_tracker_session(
    user_id: str = Depends(get_current_user_id),
    registry: SessionRegistry = Depends(get_session_registry),
) -> TrackerSession:
    session = registry.get(user_id)
    if not session.tracking_enabled:
        # Повторная попытка загрузки после сбоя хранилища
        session.set_user(user_id)
    if not session.tracking_enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="История пользователя недоступна"
        )
    return session
