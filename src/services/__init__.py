# src/services/__init__.py
"""
Микросервисы приложения.

Архитектура:
- Каждый сервис — независимое FastAPI-приложение
- PostgreSQL как единственное хранилище состояния
- Коммуникация через RabbitMQ (события) и HTTP (синхронно)

Сервисы:
- shipments_service: приём отправлений, политика контента,
  жизненный цикл статусов, привязка к поездкам
"""

__all__: list[str] = []
