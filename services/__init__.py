# services/__init__.py

"""
Модуль сервисов GrowthTracker

Анализ истории, сессия трекера, идентичность пользователя и уведомления.
"""
