"""Форматирование сообщений.

Сообщение сначала собирается в список сегментов (текст + стиль), из
которого строятся два представления:
    - консольное: Rich-разметка, стили сохраняются;
    - файловое: чистый текст, без разметки.

Формат строки:
    [HH:MM:SS] [LEVEL] dir/file.py:42 (Component#001) message
    [HH:MM:SS] [TRACE:name] dir/file.py:42 (Component#001) value

Классы:
    Segment
        Фрагмент строки со стилем.

    Formatter
        Сборка сегментов и рендер обоих представлений.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.text import Text

from .callers import CallerInfo
from .identity import InstanceIdentity
from .levels import LogKind, Severity

# Стили уровней (Rich style strings)
LEVEL_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold white on red",
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "green",
    Severity.DEBUG: "cyan",
}

TRACE_STYLE: str = "magenta"
TIMESTAMP_STYLE: str = "dim"

SEPARATOR: str = " "


@dataclass(frozen=True)
class Segment:
    """Фрагмент отформатированной строки.

    Attributes:
        text: Текст фрагмента.
        style: Rich-стиль ("" = без оформления).
    """

    text: str
    style: str = ""


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime("[%H:%M:%S]")


def format_kind(kind: LogKind) -> str:
    """``[WARNING]`` для уровня, ``[TRACE:name]`` для трассы."""
    if isinstance(kind, Severity):
        return f"[{kind.name}]"
    return f"[TRACE:{kind}]"


def format_caller(caller: CallerInfo) -> str:
    """Путь вызова как ``<каталог>/<файл>:<строка>``."""
    path = Path(caller.file)
    directory = path.parent.as_posix()
    if directory in ("", "."):
        return f"{path.name}:{caller.line}"
    return f"{directory}/{path.name}:{caller.line}"


class Formatter:
    """Форматтер записей лога.

    Attributes:
        show_caller: Добавлять ли место вызова.
        level_styles: Стили уровней для консоли.
        trace_style: Стиль трасс для консоли.

    Example:
        >>> formatter = Formatter()
        >>> formatter.format(
        ...     Severity.WARNING,
        ...     "took 5 damage",
        ...     CallerInfo("game/player.py", 12),
        ...     InstanceIdentity("Player", NumericId(1)),
        ...     datetime(2024, 1, 1, 9, 5, 7),
        ...     for_file=True,
        ... )
        '[09:05:07] [WARNING] game/player.py:12 (Player#001) took 5 damage'
    """

    def __init__(
        self,
        show_caller: bool = True,
        level_styles: dict[Severity, str] | None = None,
        trace_style: str = TRACE_STYLE,
    ) -> None:
        self.show_caller = show_caller
        self.level_styles = level_styles or LEVEL_STYLES
        self.trace_style = trace_style

    def build_segments(
        self,
        kind: LogKind,
        payload: Any,
        caller: CallerInfo,
        identity: InstanceIdentity,
        timestamp: datetime,
    ) -> list[Segment]:
        """Собирает сегменты строки в порядке вывода."""
        if isinstance(kind, Severity):
            kind_style = self.level_styles.get(kind, "")
        else:
            kind_style = self.trace_style

        parts: list[Segment] = [
            Segment(format_timestamp(timestamp), TIMESTAMP_STYLE),
            Segment(format_kind(kind), kind_style),
        ]
        if self.show_caller:
            parts.append(Segment(format_caller(caller)))
        if identity.label:
            parts.append(Segment(identity.label))
        parts.append(Segment(str(payload)))

        segments: list[Segment] = []
        for index, part in enumerate(parts):
            if index:
                segments.append(Segment(SEPARATOR))
            segments.append(part)
        return segments

    def format(
        self,
        kind: LogKind,
        payload: Any,
        caller: CallerInfo,
        identity: InstanceIdentity,
        timestamp: datetime,
        for_file: bool = False,
    ) -> str:
        """Форматирует запись.

        Args:
            kind: Уровень или имя трассы.
            payload: Значение, приводится через str().
            caller: Место вызова.
            identity: Идентичность экземпляра.
            timestamp: Время записи.
            for_file: True = чистый текст, False = Rich-разметка.

        Returns:
            Готовая строка.
        """
        segments = self.build_segments(kind, payload, caller, identity, timestamp)
        if for_file:
            return self.render_plain(segments)
        return self.render_console(segments)

    @staticmethod
    def to_text(segments: list[Segment]) -> Text:
        """Консольный вид как rich.text.Text; его печатает RichConsoleSink."""
        text = Text()
        for segment in segments:
            text.append(segment.text, style=segment.style or None)
        return text

    @classmethod
    def render_console(cls, segments: list[Segment]) -> str:
        """Rich-разметка; пользовательские ``[...]`` экранируются."""
        return cls.to_text(segments).markup

    @staticmethod
    def render_plain(segments: list[Segment]) -> str:
        return "".join(segment.text for segment in segments)
