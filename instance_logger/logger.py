"""Логгер экземпляра компонента.

Классы:
    InstanceLogger
        Пользовательский хэндл, привязанный к (компонент, id).
"""

from __future__ import annotations

from typing import Any, Iterable, Union

from .console import diagnostic_line
from .engine import LoggingEngine
from .identity import InstanceId, InstanceIdentity, NoId, NumericId, to_instance_id
from .levels import LogKind, Severity, parse_severity

SeverityLike = Union[Severity, int, str]


class InstanceLogger:
    """Логгер, привязанный к логической идентичности экземпляра.

    Настройки (уровень, файловый вывод) хранятся только в реестре сервиса
    под ключом экземпляра; логгер читает их на каждом вызове.

    Уровневые вызовы проходят, если ``severity <= get_level()``; в файл
    запись попадает, если дополнительно уровень есть в allowlist экземпляра.
    trace() печатается в консоль, если трасса включена глобально (уровень
    не учитывается), и пишется в файл, если имя трассы есть в allowlist.

    Attributes:
        engine: Процессный сервис логирования.

    Example:
        >>> log = InstanceLogger("Player", 1, level=Severity.INFO)
        >>> log.warning("took 5 damage")
        [09:05:07] [WARNING] game/player.py:12 (Player#001) took 5 damage
        >>> log.debug("ignored")  # DEBUG > INFO, ничего не выводится
        >>> log.enable_file_logging([Severity.CRITICAL])
        >>> log.critical("boom")  # + logs/<запуск>/Player-001.log
    """

    def __init__(
        self,
        component_name: str = "",
        instance_id: Union[InstanceId, int, str, None] = None,
        level: SeverityLike | None = None,
        *,
        engine: LoggingEngine | None = None,
    ) -> None:
        """Создаёт логгер и регистрирует его в реестре.

        Args:
            component_name: Имя компонента.
            instance_id: int, str или None. None = следующий номер
                процессного счётчика.
            level: Начальный уровень (None = уровень по умолчанию).
                Не меняет уже зарегистрированный ключ.
            engine: Сервис логирования (None = процессный).
        """
        if engine is None:
            from . import get_engine

            engine = get_engine()
        self.engine = engine

        resolved_id = to_instance_id(instance_id)
        if isinstance(resolved_id, NoId):
            resolved_id = NumericId(engine.registry.next_instance_id())
        self._identity = InstanceIdentity(component_name, resolved_id)

        engine.registry.register(
            self._identity.key,
            None if level is None else parse_severity(level),
        )

    # === Идентичность ===

    @property
    def identity(self) -> InstanceIdentity:
        return self._identity

    @property
    def instance_key(self) -> str:
        return self._identity.key

    @property
    def component_name(self) -> str:
        return self._identity.component_name

    @property
    def instance_id(self) -> InstanceId:
        return self._identity.instance_id

    def set_instance_name(self, new_name: str) -> None:
        """Меняет имя компонента, перенося настройки на новый ключ."""
        self._rebind(self._identity.renamed(new_name))

    def set_instance_id(self, new_id: Union[InstanceId, int, str, None]) -> None:
        """Меняет id экземпляра, перенося настройки на новый ключ.

        None снимает идентификатор (ключ = имя компонента).
        """
        self._rebind(self._identity.with_id(to_instance_id(new_id)))

    def _rebind(self, identity: InstanceIdentity) -> None:
        if not self.engine.registry.rename(self._identity.key, identity.key):
            self.engine.console.emit(
                diagnostic_line(
                    f"Instance key {identity.key} already registered, keeping its settings"
                )
            )
        self._identity = identity

    # === Уровни ===

    def set_level(self, level: SeverityLike) -> None:
        self.engine.registry.set_level(self.instance_key, parse_severity(level))

    def get_level(self) -> Severity:
        return self.engine.registry.get_level(self.instance_key)

    def is_enabled_for(self, kind: LogKind) -> bool:
        """Пройдёт ли запись данного вида в консоль."""
        if isinstance(kind, Severity):
            return kind <= self.get_level()
        return self.engine.registry.is_trace_enabled(kind)

    # === Файловый вывод ===

    def enable_file_logging(self, levels_or_traces: Iterable[LogKind] = ()) -> None:
        """Включает запись в файл экземпляра.

        Args:
            levels_or_traces: Severity и/или имена трасс. Пусто = все
                пять уровней без трасс.
        """
        self.engine.registry.enable_file_sink(self.instance_key, list(levels_or_traces))

    def disable_file_logging(self, levels: Iterable[LogKind] = ()) -> None:
        """Убирает виды записей из файлового вывода (пусто = выключить всё)."""
        self.engine.registry.disable_file_sink(self.instance_key, list(levels))

    def file_logging_kinds(self) -> frozenset[LogKind]:
        return self.engine.registry.file_sink_allowlist(self.instance_key)

    # === Вывод ===

    def log(self, severity: SeverityLike, message: Any) -> None:
        """Записывает сообщение заданного уровня."""
        severity = parse_severity(severity)
        if severity > self.get_level():
            return
        to_file = self.engine.registry.allows_file(self.instance_key, severity)
        self.engine.emit(
            severity, message, self._identity, to_console=True, to_file=to_file
        )

    def critical(self, message: Any) -> None:
        self.log(Severity.CRITICAL, message)

    def error(self, message: Any) -> None:
        self.log(Severity.ERROR, message)

    def warning(self, message: Any) -> None:
        self.log(Severity.WARNING, message)

    def info(self, message: Any) -> None:
        self.log(Severity.INFO, message)

    def debug(self, message: Any) -> None:
        self.log(Severity.DEBUG, message)

    def trace(self, trace_name: str, value: Any) -> None:
        """Записывает событие трассы.

        Args:
            trace_name: Имя трассы.
            value: Значение, приводится через str().

        Raises:
            TypeError: Имя трассы не строка.
        """
        if not isinstance(trace_name, str):
            raise TypeError(f"Unsupported trace name: {trace_name!r}")
        registry = self.engine.registry
        self.engine.emit(
            trace_name,
            value,
            self._identity,
            to_console=registry.is_trace_enabled(trace_name),
            to_file=registry.allows_file(self.instance_key, trace_name),
        )

    def __repr__(self) -> str:
        return f"InstanceLogger({self.instance_key!r}, level={self.get_level().name})"
