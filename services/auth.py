"""
Провайдер идентичности пользователя
"""

import logging
from typing import Callable, List, Optional

from database.manager import DatabaseError, validate_user_id

logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[str]], None]


class AuthError(Exception):
    """Ошибка идентификации пользователя"""
    pass


class AuthProvider:
    """
    Текущий пользователь и уведомления о смене идентичности.

    Вход выполняется внешним механизмом (cookie, заголовок, OAuth),
    сюда приходит только готовый идентификатор.
    """

    def __init__(self, user_id: Optional[str] = None):
        self._user_id: Optional[str] = None
        self._listeners: List[AuthListener] = []
        if user_id is not None:
            self.sign_in(user_id)

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def sign_in(self, user_id: str) -> None:
        try:
            validate_user_id(user_id)
        except DatabaseError as e:
            raise AuthError(str(e)) from e

        if user_id == self._user_id:
            return
        self._user_id = user_id
        logger.info(f"🔑 Вход пользователя {user_id}")
        self._emit()

    def sign_out(self) -> None:
        if self._user_id is None:
            return
        logger.info(f"👋 Выход пользователя {self._user_id}")
        self._user_id = None
        self._emit()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Подписка на смену пользователя; слушатель сразу получает текущего"""
        self._listeners.append(listener)
        listener(self._user_id)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._user_id)
