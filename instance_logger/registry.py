"""Реестр конфигурации экземпляров логгеров.

Классы:
    RegistryEntry
        Настройки одного экземпляра (уровень, файловый вывод).

    Registry
        Потокобезопасная таблица InstanceKey -> RegistryEntry,
        глобальный уровень по умолчанию и включённые трассы.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Iterable

from .levels import ALL_SEVERITIES, LogKind, Severity


@dataclass
class RegistryEntry:
    """Конфигурация экземпляра.

    Attributes:
        level: Потолок подробности экземпляра.
        file_sink_enabled: Включён ли вывод в файл.
        file_sink_allowlist: Уровни и трассы, допущенные в файл.
    """

    level: Severity
    file_sink_enabled: bool = False
    file_sink_allowlist: set[LogKind] = field(default_factory=set)

    def copy(self) -> RegistryEntry:
        return RegistryEntry(
            level=self.level,
            file_sink_enabled=self.file_sink_enabled,
            file_sink_allowlist=set(self.file_sink_allowlist),
        )


class Registry:
    """Процессный реестр настроек логгеров.

    Один экземпляр создаётся вместе с LoggingEngine и передаётся всем
    InstanceLogger. Все операции выполняются под одной блокировкой,
    поэтому одновременное создание и переименование экземпляров из
    разных потоков не портит таблицу.

    Промахи по ключу не являются ошибкой: get_level() возвращает
    уровень по умолчанию, rename() с отсутствующим старым ключом
    просто регистрирует новый.

    Example:
        >>> registry = Registry(default_level=Severity.INFO)
        >>> registry.register("Player#001", Severity.DEBUG)
        >>> registry.get_level("Player#001")
        <Severity.DEBUG: 4>
        >>> registry.get_level("Unknown")
        <Severity.INFO: 3>
    """

    def __init__(self, default_level: Severity = Severity.INFO) -> None:
        self._lock = threading.RLock()
        self._default_level = default_level
        self._entries: dict[str, RegistryEntry] = {}
        self._traces: set[str] = set()
        self._id_counter = itertools.count(1)

    # === Уровни ===

    def set_default_level(self, level: Severity) -> None:
        """Задаёт уровень для новых экземпляров. Существующие не меняются."""
        with self._lock:
            self._default_level = level

    def get_default_level(self) -> Severity:
        with self._lock:
            return self._default_level

    def register(self, instance_key: str, level: Severity | None = None) -> None:
        """Создаёт запись, если её ещё нет.

        Args:
            instance_key: Ключ экземпляра.
            level: Начальный уровень (None = текущий по умолчанию).
                Игнорируется, если запись уже существует.
        """
        with self._lock:
            if instance_key in self._entries:
                return
            self._entries[instance_key] = RegistryEntry(
                level=self._default_level if level is None else level
            )

    def set_level(self, instance_key: str, level: Severity) -> None:
        with self._lock:
            self._ensure(instance_key).level = level

    def get_level(self, instance_key: str) -> Severity:
        """Уровень экземпляра или уровень по умолчанию для неизвестного ключа."""
        with self._lock:
            entry = self._entries.get(instance_key)
            return entry.level if entry is not None else self._default_level

    # === Трассы ===

    def enable_trace(self, name: str) -> None:
        with self._lock:
            self._traces.add(name)

    def disable_trace(self, name: str) -> None:
        with self._lock:
            self._traces.discard(name)

    def is_trace_enabled(self, name: str) -> bool:
        with self._lock:
            return name in self._traces

    def enabled_traces(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._traces))

    # === Файловый вывод ===

    def enable_file_sink(self, instance_key: str, allowlist: Iterable[LogKind] = ()) -> None:
        """Включает файловый вывод.

        Args:
            instance_key: Ключ экземпляра.
            allowlist: Допущенные уровни/трассы. Пусто = все пять уровней
                (трассы не включаются).
        """
        kinds = set(allowlist) or set(ALL_SEVERITIES)
        with self._lock:
            entry = self._ensure(instance_key)
            entry.file_sink_enabled = True
            entry.file_sink_allowlist = kinds

    def disable_file_sink(self, instance_key: str, subset: Iterable[LogKind] = ()) -> None:
        """Выключает файловый вывод целиком или для части уровней/трасс.

        Args:
            instance_key: Ключ экземпляра.
            subset: Что убрать из allowlist. Пусто = выключить полностью.
        """
        kinds = set(subset)
        with self._lock:
            entry = self._entries.get(instance_key)
            if entry is None:
                return
            if kinds:
                entry.file_sink_allowlist -= kinds
            else:
                entry.file_sink_allowlist.clear()
            if not entry.file_sink_allowlist:
                entry.file_sink_enabled = False

    def is_file_sink_enabled(self, instance_key: str) -> bool:
        with self._lock:
            entry = self._entries.get(instance_key)
            return entry is not None and entry.file_sink_enabled

    def file_sink_allowlist(self, instance_key: str) -> frozenset[LogKind]:
        with self._lock:
            entry = self._entries.get(instance_key)
            if entry is None:
                return frozenset()
            return frozenset(entry.file_sink_allowlist)

    def allows_file(self, instance_key: str, kind: LogKind) -> bool:
        """Пропускает ли файловый вывод экземпляра запись данного вида."""
        with self._lock:
            entry = self._entries.get(instance_key)
            return (
                entry is not None
                and entry.file_sink_enabled
                and kind in entry.file_sink_allowlist
            )

    # === Идентичность ===

    def rename(self, old_key: str, new_key: str) -> bool:
        """Переносит конфигурацию со старого ключа на новый.

        Если старого ключа нет, новый ключ регистрируется с уровнем по
        умолчанию. Существующая запись под новым ключом никогда не
        перезаписывается: она остаётся как есть, а запись старого ключа
        удаляется.

        Returns:
            False, если новый ключ уже был занят другой записью.
        """
        with self._lock:
            if old_key == new_key:
                self.register(new_key)
                return True
            entry = self._entries.pop(old_key, None)
            if new_key in self._entries:
                # Чужая запись под новым ключом сохраняется
                return entry is None
            if entry is None:
                self.register(new_key)
            else:
                self._entries[new_key] = entry
            return True

    def next_instance_id(self) -> int:
        """Следующий номер из процессного счётчика (1, 2, 3, …)."""
        with self._lock:
            return next(self._id_counter)

    def list_instance_keys(self) -> list[str]:
        """Ключи в порядке регистрации."""
        with self._lock:
            return list(self._entries)

    def get_entry(self, instance_key: str) -> RegistryEntry | None:
        """Копия записи или None."""
        with self._lock:
            entry = self._entries.get(instance_key)
            return entry.copy() if entry is not None else None

    def _ensure(self, instance_key: str) -> RegistryEntry:
        # Вызывается под self._lock
        entry = self._entries.get(instance_key)
        if entry is None:
            entry = RegistryEntry(level=self._default_level)
            self._entries[instance_key] = entry
        return entry
