"""Идентичность экземпляра логгера.

Классы:
    NoId, NumericId, NamedId
        Варианты идентификатора экземпляра.

    InstanceIdentity
        Пара (имя компонента, идентификатор) и производный ключ реестра.

Функции:
    to_instance_id(value) -> InstanceId
        Приводит None/int/str к варианту идентификатора.
"""

from dataclasses import dataclass
from typing import Union

# Имя файла, если у компонента нет имени
FALLBACK_FILE_STEM: str = "log"


@dataclass(frozen=True)
class NoId:
    """Идентификатор не задан."""

    def key_suffix(self) -> str:
        return ""

    def file_suffix(self) -> str:
        return ""


@dataclass(frozen=True)
class NumericId:
    """Числовой идентификатор, выводится как ``#001``.

    Attributes:
        value: Номер экземпляра.
    """

    value: int

    def key_suffix(self) -> str:
        return "#%03d" % self.value

    def file_suffix(self) -> str:
        return "-%03d" % self.value


@dataclass(frozen=True)
class NamedId:
    """Строковый идентификатор, приклеивается к имени как есть.

    Attributes:
        value: Произвольная строка.
    """

    value: str

    def key_suffix(self) -> str:
        return self.value

    def file_suffix(self) -> str:
        # Строковый id уже виден в самом сообщении
        return ""


InstanceId = Union[NoId, NumericId, NamedId]


def to_instance_id(value: Union[InstanceId, int, str, None]) -> InstanceId:
    """Приводит сырое значение к варианту идентификатора.

    Args:
        value: None, int, str или готовый вариант.

    Returns:
        NoId, NumericId или NamedId.

    Raises:
        TypeError: Для bool и прочих типов.
    """
    if value is None:
        return NoId()
    if isinstance(value, (NoId, NumericId, NamedId)):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Unsupported instance id: {value!r}")
    if isinstance(value, int):
        return NumericId(value)
    if isinstance(value, str):
        return NamedId(value)
    raise TypeError(f"Unsupported instance id: {value!r}")


@dataclass(frozen=True)
class InstanceIdentity:
    """Логическая идентичность экземпляра.

    Attributes:
        component_name: Имя компонента (например, "Player").
        instance_id: Вариант идентификатора.

    Example:
        >>> InstanceIdentity("Player", NumericId(1)).key
        'Player#001'
        >>> InstanceIdentity("Player", NumericId(1)).log_filename
        'Player-001.log'
    """

    component_name: str
    instance_id: InstanceId = NoId()

    @property
    def key(self) -> str:
        """Ключ реестра (InstanceKey)."""
        return f"{self.component_name}{self.instance_id.key_suffix()}"

    @property
    def label(self) -> str:
        """Метка для вывода: ``(Player#001)`` или пустая строка."""
        if not self.component_name:
            return ""
        return f"({self.key})"

    @property
    def log_filename(self) -> str:
        """Имя файла лога экземпляра."""
        stem = self.component_name or FALLBACK_FILE_STEM
        return f"{stem}{self.instance_id.file_suffix()}.log"

    def renamed(self, component_name: str) -> "InstanceIdentity":
        return InstanceIdentity(component_name, self.instance_id)

    def with_id(self, instance_id: InstanceId) -> "InstanceIdentity":
        return InstanceIdentity(self.component_name, instance_id)
