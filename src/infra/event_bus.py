# src/infra/event_bus.py
"""
Шина событий на базе RabbitMQ.
Публикует доменные события в topic exchange, routing key = event_type.
"""

from __future__ import annotations

from datetime import datetime, timezone

import aio_pika
from aio_pika import Message, ExchangeType
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractRobustConnection

from src.common.logger import log_error, log_info
from src.common.constants import TypeMsg
from src.shared.events.base import DomainEvent


class EventBus:
    """
    Издатель событий в RabbitMQ.

    Публикация best-effort: ошибка брокера логируется,
    но не отменяет уже зафиксированную в БД операцию.
    """

    _instance: EventBus | None = None

    def __new__(cls) -> EventBus:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._connection: AbstractRobustConnection | None = None
        self._channel: AbstractChannel | None = None
        self._exchange: AbstractExchange | None = None
        self._exchange_name = "cargo.events"

    @property
    def is_connected(self) -> bool:
        """Проверяет, активно ли соединение."""
        return self._connection is not None and not self._connection.is_closed

    async def connect(self, url: str, exchange_name: str | None = None) -> None:
        """
        Подключается к RabbitMQ и объявляет exchange.

        Args:
            url: URL RabbitMQ
            exchange_name: Имя topic exchange
        """
        if self.is_connected:
            return

        if exchange_name:
            self._exchange_name = exchange_name

        await log_info("Подключение к RabbitMQ...", type_msg=TypeMsg.INFO)

        self._connection = await aio_pika.connect_robust(url)
        self._channel = await self._connection.channel()
        self._exchange = await self._channel.declare_exchange(
            self._exchange_name,
            ExchangeType.TOPIC,
            durable=True,
        )

        await log_info("Подключение к RabbitMQ установлено", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        """Закрывает соединение с RabbitMQ."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            self._channel = None
            self._exchange = None
            await log_info("Соединение с RabbitMQ закрыто", type_msg=TypeMsg.INFO)

    async def publish(self, event: DomainEvent) -> bool:
        """
        Публикует событие в exchange.

        Args:
            event: Доменное событие

        Returns:
            True если событие отправлено
        """
        if not self.is_connected or self._exchange is None:
            await log_error(f"Событие {event.event_type} не опубликовано: нет соединения с RabbitMQ")
            return False

        try:
            message = Message(
                body=event.to_json().encode(),
                content_type="application/json",
                message_id=event.event_id,
                timestamp=datetime.now(timezone.utc),
                delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            )
            await self._exchange.publish(message, routing_key=event.event_type)
        except Exception as e:
            await log_error(f"Ошибка публикации события {event.event_type}: {e}")
            return False

        await log_info(f"Событие опубликовано: {event.event_type}", type_msg=TypeMsg.DEBUG)
        return True

    async def health_check(self) -> bool:
        """True если соединение с брокером активно."""
        return self.is_connected


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Возвращает глобальный экземпляр EventBus."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


async def init_event_bus() -> EventBus:
    """Подключает шину событий по настройкам из конфигурации."""
    from src.config import settings

    event_bus = get_event_bus()
    await event_bus.connect(
        url=settings.rabbitmq.url,
        exchange_name=settings.rabbitmq.RABBITMQ_EXCHANGE,
    )
    await log_info(
        f"RabbitMQ подключён: {settings.rabbitmq.RABBITMQ_HOST}:{settings.rabbitmq.RABBITMQ_PORT}",
        type_msg=TypeMsg.INFO,
    )
    return event_bus


async def close_event_bus() -> None:
    """Закрывает подключение к RabbitMQ."""
    await get_event_bus().disconnect()
    await log_info("RabbitMQ отключён", type_msg=TypeMsg.INFO)
