#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Tracker Session
Состояние трекера одного пользователя: история, запись дня, активный период

Поток данных:
    действие пользователя -> изменение записи дня -> сохранение документа
    -> уведомление хранилища -> перезагрузка истории -> анализ -> отрисовка

Локальные изменения применяются сразу; ошибка сохранения сообщается
пользователю, но изменение не откатывается. Каждое уведомление
хранилища заменяет историю целиком и запускает полную перерисовку
с новым номером поколения.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, Optional, Union

from database.history import HistoryStore
from database.manager import DatabaseError, DatabaseReadError, DocumentStore
from models.analytics import AnalysisResult
from models.enums import Category, Period
from models.record import DailyRecord, ValidationError, materialize, reset_progress
from services import analysis
from services.auth import AuthError, AuthProvider
from services.notifications import NotificationService
from ui import messages
from ui.charts import ChartPresenter
from ui.progress import tracker_cards
from utils.datetime_utils import to_date_key, today as local_today
from utils.validators import parse_positive_number, parse_quantitative_category

logger = logging.getLogger(__name__)

Renderer = Callable[[Dict[str, Any]], None]


class TrackerSession:
    """Сессия трекера; единственный владелец HistoryStore пользователя"""

    def __init__(self, store: DocumentStore,
                 auth: Optional[AuthProvider] = None,
                 notifications: Optional[NotificationService] = None,
                 presenter: Optional[ChartPresenter] = None,
                 renderer: Optional[Renderer] = None,
                 timezone: Optional[str] = None,
                 default_period: Union[Period, str] = Period.WEEK,
                 today_provider: Optional[Callable[[], date]] = None):
        self.store = store
        self.notifications = notifications or NotificationService()
        self.presenter = presenter or ChartPresenter()
        self.timezone = timezone
        self._renderer = renderer
        self._today_provider = today_provider or (lambda: local_today(self.timezone))

        self.user_id: Optional[str] = None
        self.history = HistoryStore()
        self.today_record: Optional[DailyRecord] = None
        self.active_period = analysis.parse_period(default_period)
        self.render_generation = 0
        self.last_render: Optional[Dict[str, Any]] = None

        self._unsubscribe_store: Optional[Callable[[], None]] = None
        self._unsubscribe_auth: Optional[Callable[[], None]] = None

        if auth is not None:
            self.attach_auth(auth)

    # === ИДЕНТИЧНОСТЬ ===

    def attach_auth(self, auth: AuthProvider) -> None:
        if self._unsubscribe_auth:
            self._unsubscribe_auth()
        self._unsubscribe_auth = auth.subscribe(self.set_user)

    def set_user(self, user_id: Optional[str]) -> None:
        """Смена пользователя: состояние сбрасывается и загружается заново"""
        if user_id == self.user_id and self.today_record is not None:
            return

        previous_user = self.user_id
        self._detach_store()
        self.user_id = user_id
        self.history = HistoryStore()
        self.today_record = None
        self.render_generation += 1
        self.last_render = None

        if user_id is None:
            logger.info("🔒 Трекер скрыт: пользователь не выполнил вход")
            if previous_user is not None:
                self.notifications.success(messages.signed_out_message())
            return

        try:
            self._unsubscribe_store = self.store.subscribe(
                user_id, self._on_document, self._on_store_error
            )
        except DatabaseError as e:
            logger.error(f"❌ Не удалось подписаться на историю {user_id}: {e}")
            self.notifications.error(messages.database_error_message(e))

    def _detach_store(self) -> None:
        if self._unsubscribe_store:
            self._unsubscribe_store()
            self._unsubscribe_store = None

    @property
    def tracking_enabled(self) -> bool:
        return self.user_id is not None and self.today_record is not None

    # === СИНХРОНИЗАЦИЯ С ХРАНИЛИЩЕМ ===

    @property
    def today(self) -> date:
        return self._today_provider()

    @property
    def today_key(self) -> str:
        return to_date_key(self.today)

    def _on_document(self, document: Optional[Dict[str, Any]]) -> None:
        self.history = HistoryStore.from_document(document)
        key = self.today_key
        self.today_record = materialize(self.history.stored_on(key), key)
        logger.debug(f"🔄 История {self.user_id} загружена: {len(self.history)} дней")
        self.render()

    def _on_store_error(self, error: Exception) -> None:
        self.notifications.error(messages.database_error_message(error))

    def reload(self) -> None:
        """Повторная загрузка документа вручную"""
        user_id = self._require_user()
        try:
            document = self.store.read(user_id)
        except DatabaseError as e:
            self.notifications.error(messages.database_error_message(e))
            raise
        self._on_document(document)

    def _require_user(self) -> str:
        if self.user_id is None:
            self.notifications.error(messages.auth_required_message())
            raise AuthError("Требуется вход в систему")
        return self.user_id

    def _current_record(self) -> DailyRecord:
        self._require_user()
        if self.today_record is None:
            raise DatabaseReadError("История пользователя ещё не загружена")

        key = self.today_key
        if self.today_record.date != key:
            # Наступил новый день: вчерашняя запись больше не изменяется
            logger.info(f"📅 Новый день {key}, запись дня создана заново")
            self.today_record = materialize(self.history.stored_on(key), key)
        return self.today_record

    def save(self) -> bool:
        """Сохраняет историю целиком; False при ошибке записи"""
        user_id = self._require_user()
        record = self._current_record()
        self.history.upsert_today(record.copy(), record.date)

        try:
            self.store.write(user_id, self.history.to_document())
        except DatabaseError as e:
            logger.error(f"❌ Ошибка сохранения истории {user_id}: {e}")
            self.notifications.error(messages.save_failed_message(e))
            return False
        return True

    # === ДЕЙСТВИЯ ПОЛЬЗОВАТЕЛЯ ===

    def update_goal(self, category: Union[Category, str], value: Any) -> float:
        record = self._current_record()
        category = parse_quantitative_category(category)
        try:
            goal = parse_positive_number(value, "goal")
        except ValidationError:
            self.notifications.error(messages.invalid_number_message())
            raise

        record.set_goal(category, goal)
        if self.save():
            self.notifications.notify(messages.goal_updated_message(category, goal))
        return goal

    def update_tracker(self, category: Union[Category, str], value: Any) -> float:
        record = self._current_record()
        category = parse_quantitative_category(category)
        try:
            amount = parse_positive_number(value, "progress")
        except ValidationError:
            self.notifications.error(messages.invalid_number_message())
            raise

        progress = record.add_progress(category, amount)
        if self.save():
            self.notifications.success(messages.progress_logged_message(category, amount))
        return progress

    def toggle_mindset(self) -> bool:
        record = self._current_record()
        is100 = record.toggle_mindset()
        if self.save():
            self.notifications.notify(messages.mindset_message(is100))
        return is100

    def toggle_social_check(self) -> bool:
        record = self._current_record()
        done = record.toggle_social_check()
        if self.save():
            self.notifications.notify(messages.social_check_message(done))
        return done

    def reset_daily_progress(self) -> DailyRecord:
        record = self._current_record()
        self.today_record = reset_progress(record, self.today_key)
        if self.save():
            self.notifications.notify(messages.daily_reset_message())
        return self.today_record

    # === АНАЛИЗ И ОТРИСОВКА ===

    def analyze(self, period: Optional[Union[Period, str]] = None) -> AnalysisResult:
        return analysis.analyze(self.history, period or self.active_period, self.today)

    def set_analysis_period(self, period: Union[Period, str]) -> Dict[str, Any]:
        self.active_period = analysis.parse_period(period)
        return self.render()

    def render(self) -> Dict[str, Any]:
        """Полная перерисовка; предыдущие поколения считаются устаревшими"""
        self.render_generation += 1
        generation = self.render_generation
        payload = self.presenter.present(self.analyze(), generation)
        if self.tracking_enabled:
            payload["today"] = tracker_cards(self._current_record())
        self.last_render = payload
        if self._renderer:
            self._renderer(payload)
        return payload

    def snapshot(self, period: Union[Period, str]) -> Dict[str, Any]:
        """Анализ произвольного периода без смены активного и без перерисовки"""
        payload = self.presenter.present(self.analyze(analysis.parse_period(period)),
                                         self.render_generation)
        if self.tracking_enabled:
            payload["today"] = tracker_cards(self._current_record())
        return payload

    def is_current(self, generation: int) -> bool:
        return generation == self.render_generation

    def today_view(self) -> Dict[str, Any]:
        return tracker_cards(self._current_record())

    def close(self) -> None:
        self._detach_store()
        if self._unsubscribe_auth:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None
