"""Файловый вывод логов.

Раскладка на диске:
    logs/
        2024-12-03_14-20-02/      # один каталог на запуск процесса
            Player-001.log        # числовой id
            Inventory.log         # без id или со строковым id

Файлы только дописываются: на каждую запись файл открывается в режиме
append, строка пишется и файл закрывается.

Классы:
    FileSink
        Ленивое создание каталога запуска и запись в файлы экземпляров.
"""

from __future__ import annotations

import threading
from pathlib import Path

from .clock import Clock, SystemClock
from .console import ConsoleSink, diagnostic_line
from .identity import InstanceIdentity

DEFAULT_LOGS_ROOT: Path = Path("logs")

# Имя каталога запуска
RUN_DIR_FORMAT: str = "%Y-%m-%d_%H-%M-%S"


class FileSink:
    """Файловый приёмник.

    Ошибки файловой системы не пробрасываются: они печатаются в консоль
    через ConsoleSink, а вызов завершается без эффекта.

    Attributes:
        logs_root: Корневой каталог логов.

    Example:
        >>> sink = FileSink(console_sink, logs_root=Path("logs"))
        >>> sink.write(identity, "[12:00:00] [INFO] main.py:3 (Player#001) hi")
        True
    """

    def __init__(
        self,
        console: ConsoleSink,
        logs_root: Path = DEFAULT_LOGS_ROOT,
        clock: Clock | None = None,
    ) -> None:
        self.logs_root = Path(logs_root)
        self._console = console
        self._clock = clock or SystemClock()
        self._dir_lock = threading.Lock()
        self._files_lock = threading.Lock()
        self._file_locks: dict[Path, threading.Lock] = {}
        self._log_dir: Path | None = None
        self._created: set[Path] = set()

    @property
    def log_directory(self) -> Path | None:
        """Каталог текущего запуска (None, если ещё не создан)."""
        return self._log_dir

    def known_files(self) -> list[Path]:
        """Файлы, в которые уже шла запись."""
        with self._files_lock:
            return sorted(self._created)

    def ensure_log_directory(self) -> Path | None:
        """Создаёт каталог запуска при первом вызове.

        Returns:
            Путь к каталогу или None, если создать не удалось.
        """
        with self._dir_lock:
            if self._log_dir is not None:
                return self._log_dir

            run_dir = self.logs_root / self._clock.now().strftime(RUN_DIR_FORMAT)
            try:
                if not self.logs_root.is_dir():
                    self.logs_root.mkdir(parents=True, exist_ok=True)
                run_dir.mkdir(exist_ok=True)
            except OSError as e:
                self._console.emit(
                    diagnostic_line(f"Failed to create log directory {run_dir}", e)
                )
                return None

            self._log_dir = run_dir
            return run_dir

    def path_for(self, identity: InstanceIdentity) -> Path | None:
        log_dir = self.ensure_log_directory()
        if log_dir is None:
            return None
        return log_dir / identity.log_filename

    def write(self, identity: InstanceIdentity, plain_message: str) -> bool:
        """Дописывает строку в файл экземпляра.

        Args:
            identity: Идентичность экземпляра (определяет имя файла).
            plain_message: Строка без разметки.

        Returns:
            True при успешной записи.
        """
        path = self.path_for(identity)
        if path is None:
            return False

        with self._lock_for(path):
            try:
                with open(path, "a", encoding="utf-8") as f:
                    f.write(plain_message + "\n")
            except OSError as e:
                self._console.emit(diagnostic_line(f"Failed to write log file {path}", e))
                return False

        with self._files_lock:
            self._created.add(path)
        return True

    def _lock_for(self, path: Path) -> threading.Lock:
        with self._files_lock:
            lock = self._file_locks.get(path)
            if lock is None:
                lock = self._file_locks[path] = threading.Lock()
            return lock
