"""Определение места вызова (файл и строка).

Классы:
    CallerInfo
        Файл и строка, откуда пришло сообщение.

    CallerResolver
        Протокол резолвера места вызова.

    StackCallerResolver
        Резолвер по стеку интерпретатора, пропускающий кадры самого логгера.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from types import FrameType
from typing import Iterable, Optional, Protocol

# Каталог пакета instance_logger
PACKAGE_DIR: Path = Path(__file__).resolve().parent


@dataclass(frozen=True)
class CallerInfo:
    """Место вызова.

    Attributes:
        file: Путь к исходному файлу.
        line: Номер строки.
    """

    file: str
    line: int

    @classmethod
    def unknown(cls) -> "CallerInfo":
        return cls(file="unknown", line=0)


class CallerResolver(Protocol):
    """Протокол резолвера места вызова."""

    def resolve(self) -> CallerInfo:
        """Возвращает место вызова, пропуская кадры логгера."""
        ...


class StackCallerResolver:
    """Резолвер, обходящий стек вызовов через sys._getframe().

    Пропускает кадры, чей исходник лежит в одном из internal_dirs.
    Если все кадры внутренние, возвращает самый внешний кадр.
    Если кадров нет вовсе, возвращает CallerInfo.unknown().

    Attributes:
        internal_dirs: Каталоги, кадры из которых считаются внутренними.
    """

    def __init__(self, internal_dirs: Optional[Iterable[Path]] = None) -> None:
        dirs = internal_dirs if internal_dirs is not None else (PACKAGE_DIR,)
        self.internal_dirs: tuple[Path, ...] = tuple(Path(d).resolve() for d in dirs)
        self._internal_cache: dict[str, bool] = {}

    def resolve(self) -> CallerInfo:
        try:
            frame: Optional[FrameType] = sys._getframe(1)
        except ValueError:
            return CallerInfo.unknown()

        outermost: Optional[FrameType] = None
        while frame is not None:
            filename = frame.f_code.co_filename
            if not self._is_internal(filename):
                return CallerInfo(file=filename, line=frame.f_lineno)
            outermost = frame
            frame = frame.f_back

        if outermost is None:
            return CallerInfo.unknown()
        return CallerInfo(file=outermost.f_code.co_filename, line=outermost.f_lineno)

    def _is_internal(self, filename: str) -> bool:
        # "<string>", "<frozen ...>" и прочие псевдофайлы не внутренние
        if filename.startswith("<"):
            return False
        cached = self._internal_cache.get(filename)
        if cached is None:
            path = Path(filename).resolve()
            cached = any(path.is_relative_to(d) for d in self.internal_dirs)
            self._internal_cache[filename] = cached
        return cached
