"""Уровни важности и типы записей.

Классы:
    Severity
        Упорядоченный уровень важности (CRITICAL=0 … DEBUG=4).

Функции:
    parse_severity(value) -> Severity
        Приводит имя/число/Severity к Severity.

Константы:
    ALL_SEVERITIES: tuple[Severity, ...]
        Все пять уровней в порядке убывания важности.

Типы:
    LogKind
        Severity или имя трассы (str).
"""

from enum import IntEnum
from typing import Union


class Severity(IntEnum):
    """Уровень важности сообщения.

    Меньшее значение — более важное сообщение. Уровень логгера работает
    как потолок подробности: сообщение уровня S выводится, если
    ``S <= level``.

    Attributes:
        CRITICAL: Система в опасности.
        ERROR: Операция не удалась.
        WARNING: Неожиданное, но восстановимое состояние.
        INFO: Обычная работа.
        DEBUG: Диагностика для разработчика.
    """

    CRITICAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4

    def allows(self, severity: "Severity") -> bool:
        """Проверяет, проходит ли сообщение уровня severity при данном пороге."""
        return severity <= self


ALL_SEVERITIES: tuple[Severity, ...] = tuple(Severity)

# Severity для уровней, имя трассы для трасс
LogKind = Union[Severity, str]


def parse_severity(value: Union[Severity, int, str]) -> Severity:
    """Приводит значение к Severity.

    Args:
        value: Severity, число 0..4 или имя уровня (регистр не важен).

    Returns:
        Соответствующий Severity.

    Raises:
        ValueError: Неизвестное имя или число вне диапазона.
        TypeError: Неподдерживаемый тип значения.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Unsupported severity value: {value!r}")
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            raise ValueError(f"Severity out of range: {value}") from None
    if isinstance(value, str):
        name = value.strip().upper()
        if name in Severity.__members__:
            return Severity[name]
        raise ValueError(f"Unknown severity name: {value!r}")
    raise TypeError(f"Unsupported severity value: {value!r}")


def is_severity(kind: LogKind) -> bool:
    """True, если запись уровневая, а не трасса."""
    return isinstance(kind, Severity)
