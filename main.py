#!/usr/bin/env python3
# main.py
"""
Главная точка входа Cargo Hub.
Запускает Shipments Service, применяет схему БД или прогоняет тесты.
"""

from __future__ import annotations

import asyncio
import subprocess
import sys
from pathlib import Path

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg
from src.infra.database import init_db, close_db

VALID_MODES = ("shipments", "migrate", "tests")


def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent


async def run_tests() -> bool:
    """
    Запускает все unit тесты.

    Returns:
        True если все тесты прошли, False иначе
    """
    await log_info("Запуск unit тестов...", type_msg=TypeMsg.INFO)

    try:
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"],
            cwd=str(get_project_root()),
            capture_output=True,
            text=True,
            timeout=300,  # 5 минут
        )
    except subprocess.TimeoutExpired:
        await log_error("Превышено время ожидания выполнения тестов (5 мин)")
        return False

    if result.returncode == 0:
        await log_info("Все тесты прошли успешно", type_msg=TypeMsg.INFO)
        return True

    await log_error(f"Тесты завершились с ошибками:\n{result.stdout}\n{result.stderr}")
    return False


async def run_migrate() -> None:
    """Применяет migrations/init.sql и закрывает подключение."""
    await log_info("Применение миграций...", type_msg=TypeMsg.INFO)
    try:
        await init_db(apply_schema=True)
    finally:
        await close_db()


async def run_shipments_service() -> None:
    """Запускает Shipments Service (приём и сопровождение отправлений)."""
    import uvicorn

    await log_info(
        f"Запуск Shipments Service на порту {settings.deployment.SHIPMENTS_SERVICE_PORT}...",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "src.services.shipments_service.app:app",
        host=settings.deployment.SHIPMENTS_SERVICE_HOST,
        port=settings.deployment.SHIPMENTS_SERVICE_PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info("Shipments Service: graceful shutdown", type_msg=TypeMsg.DEBUG)
        await server.shutdown()


async def main(mode: str = "shipments") -> int:
    """
    Главная функция запуска.

    Args:
        mode: Режим запуска (shipments, migrate, tests)

    Returns:
        Код завершения процесса
    """
    setup_logging()

    await log_info(
        f"{settings.system.PROJECT_NAME} v{settings.system.VERSION} — запуск в режиме '{mode}'",
        type_msg=TypeMsg.INFO,
    )

    try:
        if mode == "shipments":
            await run_shipments_service()
        elif mode == "migrate":
            await run_migrate()
        elif mode == "tests":
            return 0 if await run_tests() else 1
        else:
            await log_error(f"Неизвестный режим: {mode}")
            return 2
    except KeyboardInterrupt:
        await log_info("Получен сигнал остановки (Ctrl+C)", type_msg=TypeMsg.INFO)
    except Exception as e:
        await log_error(f"Критическая ошибка: {e}")
        raise

    await log_info("Приложение остановлено", type_msg=TypeMsg.INFO)
    return 0


def print_usage() -> None:
    """Выводит справку по использованию."""
    print("""
Cargo Hub — сервис грузовых отправлений

Использование:
    python main.py [mode]

Режимы:
    shipments   — Shipments Service (:8092), по умолчанию
    migrate     — применить migrations/init.sql
    tests       — прогнать pytest
    """)


if __name__ == "__main__":
    mode = "shipments"

    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        if arg not in VALID_MODES:
            print(f"Неизвестный режим: {arg}")
            print_usage()
            sys.exit(2)
        mode = arg

    try:
        sys.exit(asyncio.run(main(mode)))
    except KeyboardInterrupt:
        print("\nПриложение остановлено пользователем")
