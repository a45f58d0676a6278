"""
Конфигурация pytest для тестов instance_logger.

Определяет фикстуры для:
- Подменных часов, резолвера вызова и консоли
- Сервиса логирования с корнем логов во временном каталоге
- Сброса процессного сервиса после тестов
"""

from datetime import datetime, timedelta

import pytest
from rich.text import Text

import instance_logger
from instance_logger import (
    CallerInfo,
    FileSink,
    LoggingEngine,
    Registry,
    Severity,
)

START_TIME = datetime(2024, 12, 3, 14, 20, 2)


class FakeClock:
    """Часы, которые двигаются только вручную."""

    def __init__(self, now: datetime = START_TIME):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: int = 1) -> None:
        self.current += timedelta(seconds=seconds)


class FakeCallerResolver:
    """Всегда возвращает заданное место вызова."""

    def __init__(self, file: str = "game/player.py", line: int = 12):
        self.file = file
        self.line = line

    def resolve(self) -> CallerInfo:
        return CallerInfo(self.file, self.line)


class ListConsoleSink:
    """Собирает строки вместо печати."""

    def __init__(self):
        self.lines: list[str] = []

    def emit(self, text: str) -> None:
        self.lines.append(text)

    @property
    def plain(self) -> list[str]:
        """Строки без Rich-разметки."""
        return [Text.from_markup(line).plain for line in self.lines]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def caller_resolver():
    return FakeCallerResolver()


@pytest.fixture
def console_sink():
    return ListConsoleSink()


@pytest.fixture
def logs_root(tmp_path):
    return tmp_path / "logs"


@pytest.fixture
def run_dir(logs_root):
    """Каталог запуска для START_TIME."""
    return logs_root / "2024-12-03_14-20-02"


@pytest.fixture
def engine(clock, caller_resolver, console_sink, logs_root):
    """
    Сервис логирования на подменных зависимостях.

    Уровень по умолчанию — INFO.
    """
    return LoggingEngine(
        registry=Registry(default_level=Severity.INFO),
        console=console_sink,
        file_sink=FileSink(console_sink, logs_root=logs_root, clock=clock),
        caller_resolver=caller_resolver,
        clock=clock,
    )


@pytest.fixture
def reset_global_engine(monkeypatch):
    """Изолирует процессный сервис instance_logger на время теста."""
    monkeypatch.setattr(instance_logger, "_engine", None)
    monkeypatch.setattr(instance_logger, "_current_config", None)
    yield
