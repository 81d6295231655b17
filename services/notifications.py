"""
Сервис статусных уведомлений трекера
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional

from models.enums import StatusLevel

logger = logging.getLogger(__name__)


@dataclass
class StatusMessage:
    """Кратковременное уведомление для пользователя"""
    text: str
    level: StatusLevel = StatusLevel.INFO
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self):
        return {"text": self.text, "level": self.level.value, "created_at": self.created_at}


class NotificationService:
    """
    Очередь последних уведомлений.

    Хранит ограниченное число сообщений, старые вытесняются.
    """

    def __init__(self, max_messages: int = 50):
        self._messages: Deque[StatusMessage] = deque(maxlen=max_messages)

    def notify(self, text: str, level: StatusLevel = StatusLevel.INFO) -> StatusMessage:
        message = StatusMessage(text=text, level=level)
        self._messages.append(message)

        if level is StatusLevel.ERROR:
            logger.warning(f"⚠️ {text}")
        else:
            logger.info(f"📢 {text}")

        return message

    def success(self, text: str) -> StatusMessage:
        return self.notify(text, StatusLevel.SUCCESS)

    def error(self, text: str) -> StatusMessage:
        return self.notify(text, StatusLevel.ERROR)

    @property
    def last(self) -> Optional[StatusMessage]:
        return self._messages[-1] if self._messages else None

    def recent(self, limit: int = 10) -> List[StatusMessage]:
        return list(self._messages)[-limit:]
