"""Консольный вывод через Rich.

Классы:
    ConsoleSink
        Протокол консольного приёмника: одна строка с разметкой за вызов.

    RichConsoleSink
        Приёмник поверх rich.console.Console. Записи логгера принимает
        готовым rich.text.Text, без повторного разбора разметки.
"""

from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.text import Text


class ConsoleSink(Protocol):
    """Приёмник строк с Rich-разметкой."""

    def emit(self, text: str) -> None:
        ...


class RichConsoleSink:
    """Печатает записи логгера в Rich Console.

    Attributes:
        console: Rich Console, в который идёт вывод.
    """

    def __init__(
        self,
        console: Console | None = None,
        force_terminal: bool = False,
        no_color: bool = False,
    ) -> None:
        """Инициализация.

        Args:
            console: Готовая консоль. Если не задана, создаётся новая.
            force_terminal: Принудительно включить терминальный режим.
            no_color: Отключить цвета.
        """
        if console is None:
            console = Console(
                force_terminal=force_terminal or None,
                no_color=no_color,
            )
        self.console = console

    def emit(self, text: str) -> None:
        # highlight=False: не подсвечиваем числа и пути в пользовательском тексте
        self.console.print(
            text, markup=True, highlight=False, emoji=False, soft_wrap=True
        )

    def emit_text(self, text: Text) -> None:
        """Печатает готовый Text: разметка и :emoji: в нём не разбираются."""
        self.console.print(text, highlight=False, emoji=False, soft_wrap=True)


def diagnostic_line(message: str, error: BaseException | None = None) -> str:
    """Формирует строку внутренней диагностики логгера для ConsoleSink.

    Args:
        message: Описание проблемы.
        error: Исключение-первопричина.

    Returns:
        Строка с Rich-разметкой.
    """
    text = escape(message)
    if error is not None:
        text += f": {escape(str(error))}"
    return f"[bold red]\\[instance_logger][/bold red] {text}"
