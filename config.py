#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - Configuration
Централизованная конфигурация с валидацией
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация хранилища документов"""
    data_dir: Path
    collection: str = "userGrowthHistory"

@dataclass
class AnalysisConfig:
    """Конфигурация анализа"""
    timezone: Optional[str] = None  # None - локальная зона хоста
    default_period: str = "week"

@dataclass
class ServerConfig:
    """Конфигурация сервера дашборда"""
    host: str = "0.0.0.0"
    port: int = 8080
    debug_mode: bool = False
    max_sessions: int = 256

class TrackerConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        self.storage = StorageConfig(
            data_dir=self.data_dir,
            collection=os.getenv('TRACKER_COLLECTION', 'userGrowthHistory')
        )

        self.analysis = AnalysisConfig(
            timezone=os.getenv('TRACKER_TIMEZONE') or None,
            default_period=os.getenv('DEFAULT_PERIOD', 'week').lower()
        )

        self.server = ServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', 8080)),
            debug_mode=os.getenv('DEBUG_MODE', 'false').lower() == 'true',
            max_sessions=int(os.getenv('MAX_SESSIONS', 256))
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.analysis.timezone:
            try:
                pytz.timezone(self.analysis.timezone)
            except pytz.UnknownTimeZoneError:
                errors.append(f"Неизвестная временная зона: {self.analysis.timezone}")

        if self.analysis.default_period not in ('week', 'month', 'year', 'all'):
            errors.append("DEFAULT_PERIOD должен быть week, month, year или all")

        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if self.server.max_sessions < 1:
            errors.append("MAX_SESSIONS должен быть не меньше 1")

        if not self.storage.collection:
            errors.append("TRACKER_COLLECTION не может быть пустым")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        for directory in (self.data_dir, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования для logging.config.dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        handler_config: Dict[str, Any] = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'stream': sys.stdout
            }
        }
        if self.log_to_file:
            handler_config['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"tracker_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': handler_config,
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'debug_mode': self.server.debug_mode,
                'max_sessions': self.server.max_sessions
            },
            'storage': {
                'data_dir': str(self.storage.data_dir),
                'collection': self.storage.collection
            },
            'analysis': {
                'timezone': self.analysis.timezone or 'local',
                'default_period': self.analysis.default_period
            },
            'log_level': self.log_level.value
        }

# Глобальный экземпляр конфигурации
config = TrackerConfig()

__all__ = [
    'config',
    'TrackerConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'AnalysisConfig',
    'ServerConfig'
]
