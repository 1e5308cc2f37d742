# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Заголовки, которые Request Gateway проставляет после аутентификации
USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"

# Стоп-слова из исходной политики контента
DEFAULT_PROHIBITED_KEYWORDS: tuple[str, ...] = ("drugs", "weapons", "bomb", "illegal")
