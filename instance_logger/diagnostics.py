"""Диагностические утилиты для системы логирования.

Функции:
    dump_debug_info()
        Собирает информацию о системе для баг-репортов.

    check_config()
        Валидирует конфигурацию логирования.

    get_registry_info()
        Возвращает настройки всех зарегистрированных экземпляров.
"""

from __future__ import annotations

import os
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import LoggingConfig
from .levels import LogKind, Severity

if TYPE_CHECKING:
    from .engine import LoggingEngine


def get_package_versions() -> dict[str, str]:
    """Получает версии установленных пакетов.

    Returns:
        Словарь {package_name: version}.
    """
    from importlib.metadata import PackageNotFoundError, version

    versions: dict[str, str] = {}

    try:
        from instance_logger import __version__

        versions["instance_logger"] = __version__
    except (ImportError, AttributeError):
        versions["instance_logger"] = "unknown"

    # Основные зависимости
    for package in ("pydantic", "pydantic-settings", "rich"):
        try:
            versions[package] = version(package)
        except PackageNotFoundError:
            versions[package] = "not installed"

    return versions


def format_kinds(kinds: frozenset[LogKind] | set[LogKind]) -> str:
    """Уровни по порядку важности, затем трассы по алфавиту."""
    severities = sorted(k for k in kinds if isinstance(k, Severity))
    traces = sorted(k for k in kinds if not isinstance(k, Severity))
    names = [s.name for s in severities] + [f"TRACE:{t}" for t in traces]
    return ", ".join(names) if names else "-"


def get_registry_info(engine: LoggingEngine | None = None) -> list[dict[str, Any]]:
    """Получает настройки всех экземпляров из реестра.

    Returns:
        Список словарей {key, level, file_sink, allowlist} в порядке регистрации.
    """
    if engine is None:
        from . import get_engine

        engine = get_engine()

    rows: list[dict[str, Any]] = []
    for key in engine.registry.list_instance_keys():
        entry = engine.registry.get_entry(key)
        if entry is None:
            # Запись переименована между list и get
            continue
        rows.append(
            {
                "key": key,
                "level": entry.level.name,
                "file_sink": entry.file_sink_enabled,
                "allowlist": format_kinds(entry.file_sink_allowlist),
            }
        )
    return rows


def get_environment_vars() -> dict[str, str]:
    """Получает значения INSTANCE_LOG_* переменных окружения."""
    prefix = "INSTANCE_LOG_"
    return {key: value for key, value in os.environ.items() if key.startswith(prefix)}


def dump_debug_info(engine: LoggingEngine | None = None) -> str:
    """Собирает полную диагностическую информацию.

    Формирует текстовый отчёт для баг-репортов, включающий:
    - Информацию о системе (Python, OS)
    - Версии пакетов
    - Конфигурацию логирования
    - Переменные окружения INSTANCE_LOG_*
    - Реестр экземпляров и включённые трассы
    - Каталог логов текущего запуска

    Args:
        engine: Сервис логирования (если None, берётся процессный).

    Returns:
        Отформатированный текстовый отчёт.

    Example:
        >>> from instance_logger.diagnostics import dump_debug_info
        >>> print(dump_debug_info())
        ========================================
        Instance Logger Debug Info
        ...
    """
    from . import get_current_config, get_engine

    if engine is None:
        engine = get_engine()
    config = get_current_config()

    lines: list[str] = []

    # Заголовок
    lines.append("=" * 40)
    lines.append("Instance Logger Debug Info")
    lines.append("=" * 40)
    lines.append(f"Generated: {datetime.now().isoformat()}")
    lines.append("")

    # System
    lines.append("[System]")
    lines.append(f"Python: {sys.version.split()[0]}")
    lines.append(f"Platform: {platform.platform()}")
    lines.append(f"OS: {platform.system()} {platform.release()}")
    lines.append("")

    # Package Versions
    lines.append("[Packages]")
    for package, package_version in sorted(get_package_versions().items()):
        lines.append(f"{package}: {package_version}")
    lines.append("")

    # Config
    lines.append("[Logging Config]")
    lines.append(f"level: {config.level}")
    lines.append(f"logs_root: {config.logs_root}")
    lines.append(f"traces: {', '.join(config.traces) or '-'}")
    lines.append(f"show_caller: {config.show_caller}")
    lines.append(f"no_color: {config.no_color}")
    lines.append("")

    # Environment Variables
    lines.append("[Environment Variables]")
    env_vars = get_environment_vars()
    if env_vars:
        for key, value in sorted(env_vars.items()):
            lines.append(f"{key}: {value}")
    else:
        lines.append("No INSTANCE_LOG_* variables set")
    lines.append("")

    # Registry
    lines.append("[Registry]")
    lines.append(f"default_level: {engine.registry.get_default_level().name}")
    traces = engine.registry.enabled_traces()
    lines.append(f"enabled_traces: {', '.join(traces) if traces else '-'}")
    rows = get_registry_info(engine)
    if rows:
        for i, row in enumerate(rows, 1):
            file_state = f"file=[{row['allowlist']}]" if row["file_sink"] else "file=off"
            lines.append(f"{i}. {row['key']} (level={row['level']}) {file_state}")
    else:
        lines.append("No instances registered")
    lines.append("")

    # Files
    lines.append("[Log Files]")
    log_dir = engine.file_sink.log_directory
    lines.append(f"directory: {log_dir or 'not created yet'}")
    for path in engine.file_sink.known_files():
        lines.append(f"  {path.name}")

    lines.append("")
    lines.append("=" * 40)

    return "\n".join(lines)


def check_config(config: LoggingConfig | None = None) -> list[str]:
    """Валидирует конфигурацию логирования.

    Проверяет:
    - Что logs_root не является файлом
    - Доступность корня логов (или ближайшего существующего родителя) для записи

    Args:
        config: Конфигурация для проверки (если None, берётся текущая).

    Returns:
        Список предупреждений (пустой если всё OK).

    Example:
        >>> from instance_logger.diagnostics import check_config
        >>> warnings = check_config()
        >>> if warnings:
        ...     for w in warnings:
        ...         print(f"⚠️ {w}")
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    warnings: list[str] = []

    root = Path(config.logs_root)
    if root.exists():
        if not root.is_dir():
            warnings.append(f"Logs root is not a directory: {root}")
        elif not os.access(root, os.W_OK):
            warnings.append(f"Logs root is not writable: {root}")
    else:
        # Ищем ближайший существующий родитель
        parent = root.absolute().parent
        while not parent.exists() and parent != parent.parent:
            parent = parent.parent
        if not os.access(parent, os.W_OK):
            warnings.append(f"Cannot create logs root, directory not writable: {parent}")

    return warnings
