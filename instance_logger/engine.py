"""Сервис логирования процесса.

Классы:
    LoggingEngine
        Связка реестра, форматтера, консоли, файлового приёмника,
        резолвера вызова и часов. Один экземпляр на процесс,
        передаётся каждому InstanceLogger.
"""

from __future__ import annotations

from typing import Any

from .callers import CallerResolver, StackCallerResolver
from .clock import Clock, SystemClock
from .config import LoggingConfig
from .console import ConsoleSink, RichConsoleSink
from .file_sink import FileSink
from .formatters import Formatter
from .identity import InstanceIdentity
from .levels import LogKind, parse_severity
from .registry import Registry


class LoggingEngine:
    """Процессный сервис логирования.

    Attributes:
        registry: Реестр настроек экземпляров.
        formatter: Форматтер сообщений.
        console: Консольный приёмник.
        file_sink: Файловый приёмник.
        caller_resolver: Резолвер места вызова.
        clock: Часы.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        formatter: Formatter | None = None,
        console: ConsoleSink | None = None,
        file_sink: FileSink | None = None,
        caller_resolver: CallerResolver | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.registry = registry or Registry()
        self.formatter = formatter or Formatter()
        self.console = console or RichConsoleSink()
        self.clock = clock or SystemClock()
        self.file_sink = file_sink or FileSink(self.console, clock=self.clock)
        self.caller_resolver = caller_resolver or StackCallerResolver()

    @classmethod
    def from_config(cls, config: LoggingConfig) -> LoggingEngine:
        """Собирает сервис по конфигурации."""
        clock = SystemClock()
        console = RichConsoleSink(
            force_terminal=config.force_terminal, no_color=config.no_color
        )
        registry = Registry(default_level=parse_severity(config.level))
        for name in config.traces:
            registry.enable_trace(name)
        return cls(
            registry=registry,
            formatter=Formatter(show_caller=config.show_caller),
            console=console,
            file_sink=FileSink(console, logs_root=config.logs_root, clock=clock),
            clock=clock,
        )

    def emit(
        self,
        kind: LogKind,
        payload: Any,
        identity: InstanceIdentity,
        *,
        to_console: bool,
        to_file: bool,
    ) -> None:
        """Форматирует запись один раз и отправляет в выбранные приёмники.

        Args:
            kind: Уровень или имя трассы.
            payload: Значение сообщения.
            identity: Идентичность экземпляра.
            to_console: Печатать в консоль.
            to_file: Писать в файл экземпляра.
        """
        if not (to_console or to_file):
            return

        caller = self.caller_resolver.resolve()
        timestamp = self.clock.now()
        segments = self.formatter.build_segments(
            kind, payload, caller, identity, timestamp
        )

        if to_console:
            emit_text = getattr(self.console, "emit_text", None)
            if emit_text is not None:
                emit_text(self.formatter.to_text(segments))
            else:
                self.console.emit(self.formatter.render_console(segments))
        if to_file:
            self.file_sink.write(identity, self.formatter.render_plain(segments))
