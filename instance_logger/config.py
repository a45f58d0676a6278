"""Конфигурация системы логирования.

Классы:
    LoggingConfig
        Pydantic-модель для настройки логирования с поддержкой env variables.

Environment Variables:
    INSTANCE_LOG_LEVEL: Уровень по умолчанию для новых экземпляров.
    INSTANCE_LOG_LOGS_ROOT: Корневой каталог логов.
    INSTANCE_LOG_TRACES: Трассы, включённые при старте (JSON-список).
    INSTANCE_LOG_SHOW_CALLER: Показывать место вызова (true/false).
    INSTANCE_LOG_NO_COLOR: Отключить цвета (true/false).
    INSTANCE_LOG_FORCE_TERMINAL: Принудительный терминальный режим (true/false).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Допустимые уровни логирования
LevelName = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class LoggingConfig(BaseSettings):
    """Конфигурация системы логирования.

    Поддерживает загрузку из environment variables с префиксом INSTANCE_LOG_.

    Приоритет настроек (от высшего к низшему):
        1. Явный параметр в коде
        2. Environment variable
        3. Default value

    Attributes:
        level: Уровень по умолчанию для новых экземпляров.
        logs_root: Корень, в котором создаётся каталог запуска.
        traces: Имена трасс, включённых при старте.
        show_caller: Показывать файл и строку вызова.
        no_color: Отключить цвета в консоли.
        force_terminal: Принудительно включить терминальный режим.

    Example:
        >>> # Через код
        >>> config = LoggingConfig(level="DEBUG", logs_root="/tmp/game-logs")
        >>>
        >>> # Через environment
        >>> # export INSTANCE_LOG_LEVEL=DEBUG
        >>> # export INSTANCE_LOG_TRACES='["physics", "ai"]'
        >>> config = LoggingConfig()  # Прочитает из env
    """

    level: LevelName = Field(
        default="INFO",
        description="Уровень по умолчанию для новых экземпляров",
    )

    logs_root: Path = Field(
        default=Path("logs"),
        description="Корневой каталог логов",
    )

    traces: list[str] = Field(
        default_factory=list,
        description="Трассы, включённые при старте",
    )

    show_caller: bool = Field(
        default=True,
        description="Показывать файл и строку вызова",
    )

    no_color: bool = Field(
        default=False,
        description="Отключить цвета в консоли",
    )

    force_terminal: bool = Field(
        default=False,
        description="Принудительно включить терминальный режим",
    )

    model_config = SettingsConfigDict(
        env_prefix="INSTANCE_LOG_",
        env_file=None,  # Не читаем .env автоматически
        extra="forbid",
        frozen=True,
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        """Приводит имя уровня к верхнему регистру."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("traces")
    @classmethod
    def strip_traces(cls, value: list[str]) -> list[str]:
        """Убирает пустые имена трасс."""
        return [name.strip() for name in value if name.strip()]
