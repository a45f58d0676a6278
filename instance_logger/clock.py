"""Источник времени.

Классы:
    Clock
        Протокол часов.

    SystemClock
        Локальное системное время.
"""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Протокол часов: год, месяц, день, час, минута, секунда."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Локальное время системы."""

    def now(self) -> datetime:
        return datetime.now()
