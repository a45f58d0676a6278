"""Уровневое логирование экземпляров компонентов с трассами и файлами.

Функции:
    setup_logging(config: LoggingConfig | None = None) -> LoggingEngine
        Создать и установить процессный сервис логирования.

    get_engine() -> LoggingEngine
        Текущий сервис (создаётся с дефолтами при первом обращении).

    get_logger(component_name, instance_id=None, level=None) -> InstanceLogger
        Получить логгер экземпляра.

    set_default_level(level) / enable_trace(name) / disable_trace(name)
        Глобальные настройки реестра.

    dump_debug_info(engine=None) -> str
        Собрать диагностическую информацию для баг-репортов.

    check_config(config=None) -> list[str]
        Валидировать конфигурацию логирования.

Классы:
    InstanceLogger
        Хэндл экземпляра (critical/error/warning/info/debug/trace).

    LoggingEngine
        Процессный сервис: реестр, форматтер, консоль, файлы.

    LoggingConfig
        Pydantic-модель конфигурации с поддержкой environment variables.

    Severity
        CRITICAL=0, ERROR=1, WARNING=2, INFO=3, DEBUG=4.

Environment Variables:
    INSTANCE_LOG_LEVEL: Уровень по умолчанию для новых экземпляров.
    INSTANCE_LOG_LOGS_ROOT: Корневой каталог логов.
    INSTANCE_LOG_TRACES: Трассы, включённые при старте.

Example:
    >>> from instance_logger import Severity, enable_trace, get_logger
    >>>
    >>> log = get_logger("Player", 1, level=Severity.INFO)
    >>> log.warning("took 5 damage")
    >>> # -> [09:05:07] [WARNING] game/player.py:12 (Player#001) took 5 damage
    >>>
    >>> enable_trace("physics")
    >>> log.trace("physics", {"vx": 1.5})
    >>>
    >>> log.enable_file_logging([Severity.CRITICAL])
    >>> log.critical("boom")  # -> logs/2024-12-03_14-20-02/Player-001.log
"""

from __future__ import annotations

import threading

from .callers import CallerInfo, CallerResolver, StackCallerResolver
from .clock import Clock, SystemClock
from .config import LoggingConfig
from .console import ConsoleSink, RichConsoleSink
from .engine import LoggingEngine
from .file_sink import FileSink
from .formatters import Formatter, Segment
from .identity import InstanceIdentity, NamedId, NoId, NumericId
from .levels import ALL_SEVERITIES, Severity, parse_severity
from .logger import InstanceLogger
from .registry import Registry, RegistryEntry
from .diagnostics import check_config, dump_debug_info, get_registry_info

__version__ = "0.1.0"

# Глобальное состояние
_engine: LoggingEngine | None = None
_current_config: LoggingConfig | None = None
_engine_lock = threading.Lock()


def setup_logging(config: LoggingConfig | None = None) -> LoggingEngine:
    """Создаёт процессный сервис логирования.

    Args:
        config: Конфигурация логирования. Если None, используются дефолты
            и переменные окружения INSTANCE_LOG_*.

    Returns:
        Установленный LoggingEngine.

    Note:
        Повторный вызов заменяет сервис; уже созданные логгеры продолжают
        работать со старым.
    """
    global _engine, _current_config

    config = config or LoggingConfig()
    engine = LoggingEngine.from_config(config)
    with _engine_lock:
        _engine = engine
        _current_config = config
    return engine


def get_engine() -> LoggingEngine:
    """Возвращает процессный сервис, создавая его при первом обращении."""
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                # Ленивая инициализация с дефолтами
                _install_default()
    return _engine  # type: ignore[return-value]


def _install_default() -> None:
    global _engine, _current_config

    _current_config = LoggingConfig()
    _engine = LoggingEngine.from_config(_current_config)


def get_current_config() -> LoggingConfig:
    """Возвращает текущую конфигурацию логирования.

    Returns:
        Активная LoggingConfig или дефолтная если не настроено.
    """
    return _current_config or LoggingConfig()


def get_logger(
    component_name: str = "",
    instance_id: int | str | None = None,
    level: Severity | int | str | None = None,
) -> InstanceLogger:
    """Создаёт логгер экземпляра на процессном сервисе.

    Args:
        component_name: Имя компонента.
        instance_id: Идентификатор (None = следующий номер).
        level: Начальный уровень (None = уровень по умолчанию).

    Returns:
        InstanceLogger.
    """
    return InstanceLogger(component_name, instance_id, level, engine=get_engine())


def set_default_level(level: Severity | int | str) -> None:
    """Уровень по умолчанию для новых экземпляров."""
    get_engine().registry.set_default_level(parse_severity(level))


def enable_trace(name: str) -> None:
    get_engine().registry.enable_trace(name)


def disable_trace(name: str) -> None:
    get_engine().registry.disable_trace(name)


def is_trace_enabled(name: str) -> bool:
    return get_engine().registry.is_trace_enabled(name)


# Публичный API
__all__ = [
    # Функции
    "setup_logging",
    "get_engine",
    "get_current_config",
    "get_logger",
    "set_default_level",
    "enable_trace",
    "disable_trace",
    "is_trace_enabled",
    "parse_severity",
    # Диагностика
    "dump_debug_info",
    "check_config",
    "get_registry_info",
    # Классы
    "Severity",
    "ALL_SEVERITIES",
    "InstanceLogger",
    "InstanceIdentity",
    "NoId",
    "NumericId",
    "NamedId",
    "LoggingEngine",
    "LoggingConfig",
    "Registry",
    "RegistryEntry",
    "Formatter",
    "Segment",
    "FileSink",
    # Внешние зависимости (для подмены)
    "CallerInfo",
    "CallerResolver",
    "StackCallerResolver",
    "Clock",
    "SystemClock",
    "ConsoleSink",
    "RichConsoleSink",
]
