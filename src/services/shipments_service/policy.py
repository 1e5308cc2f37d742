from typing import Callable, Iterable, Optional

from src.common.constants import DEFAULT_PROHIBITED_KEYWORDS

# Предикат политики контента: True, если описание нарушает политику
ContentPolicy = Callable[[str], bool]


class KeywordDenylistPolicy:
    """
    Стоп-лист по подстроке без учёта регистра.

    Совпадение ищется как подстрока, а не как слово целиком:
    "bombastic" срабатывает на "bomb".
    """

    def __init__(self, keywords: Iterable[str] = DEFAULT_PROHIBITED_KEYWORDS):
        self.keywords = tuple(k.lower() for k in keywords if k)

    def find_prohibited(self, text: str) -> Optional[str]:
        """Возвращает первое найденное стоп-слово или None."""
        lowered = (text or "").lower()
        for keyword in self.keywords:
            if keyword in lowered:
                return keyword
        return None

    def __call__(self, text: str) -> bool:
        return self.find_prohibited(text) is not None
