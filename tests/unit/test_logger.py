"""Тесты logger.py - InstanceLogger.

Покрытие:
- фильтрация по уровню (потолок подробности)
- трассы: консоль по глобальному флагу, файл по allowlist
- файловый вывод и allowlist
- переименование экземпляра
- автоматические id
"""

import threading

import pytest

from instance_logger import InstanceLogger, Severity
from instance_logger.identity import NamedId, NoId, NumericId


@pytest.fixture
def player(engine):
    return InstanceLogger("Player", 1, level=Severity.INFO, engine=engine)


def read_log(path):
    return path.read_text(encoding="utf-8").splitlines()


class TestScenarios:
    """Сквозные сценарии."""

    def test_warning_shown_debug_suppressed(self, player, console_sink):
        player.warning("took 5 damage")

        assert len(console_sink.lines) == 1
        line = console_sink.plain[0]
        assert "[WARNING]" in line
        assert "(Player#001)" in line
        assert line.endswith("took 5 damage")
        assert "[TRACE" not in line

        player.debug("ignored")
        assert len(console_sink.lines) == 1

    def test_critical_only_file_logging(self, player, run_dir):
        player.enable_file_logging([Severity.CRITICAL])
        player.critical("boom")

        log_file = run_dir / "Player-001.log"
        lines = read_log(log_file)
        assert len(lines) == 1
        assert lines[0].endswith("boom")

        player.error("no")
        assert read_log(log_file) == lines


class TestLevelFiltering:
    """Уровень — потолок подробности для обоих приёмников."""

    @pytest.mark.parametrize("level", list(Severity))
    def test_ceiling(self, engine, console_sink, run_dir, level):
        log = InstanceLogger("Unit", 7, level=level, engine=engine)
        log.enable_file_logging()

        for severity in Severity:
            log.log(severity, severity.name.lower())

        emitted = [line.rsplit(" ", 1)[-1] for line in console_sink.plain]
        expected = [s.name.lower() for s in Severity if s <= level]
        assert emitted == expected

        file_lines = read_log(run_dir / "Unit-007.log")
        assert [line.rsplit(" ", 1)[-1] for line in file_lines] == expected

    def test_set_level(self, player, console_sink):
        player.set_level(Severity.DEBUG)
        player.debug("now visible")
        assert player.get_level() is Severity.DEBUG
        assert console_sink.plain[0].endswith("now visible")

    def test_set_level_by_name(self, player):
        player.set_level("error")
        assert player.get_level() is Severity.ERROR

    def test_default_level_applies(self, engine):
        engine.registry.set_default_level(Severity.WARNING)
        log = InstanceLogger("Enemy", engine=engine)
        assert log.get_level() is Severity.WARNING

    def test_existing_key_keeps_level(self, engine):
        """Второй логгер с тем же ключом не затирает уровень первого."""
        first = InstanceLogger("Player", 1, level=Severity.DEBUG, engine=engine)
        second = InstanceLogger("Player", 1, level=Severity.ERROR, engine=engine)

        assert first.get_level() is Severity.DEBUG
        assert second.get_level() is Severity.DEBUG

    def test_is_enabled_for(self, player, engine):
        assert player.is_enabled_for(Severity.INFO) is True
        assert player.is_enabled_for(Severity.DEBUG) is False
        assert player.is_enabled_for("physics") is False
        engine.registry.enable_trace("physics")
        assert player.is_enabled_for("physics") is True


class TestTrace:
    """Тесты trace()."""

    def test_unknown_trace_disabled(self, player, console_sink):
        player.trace("physics", 1)
        assert console_sink.lines == []

    def test_enabled_trace_ignores_level(self, engine, console_sink):
        log = InstanceLogger("Quiet", 1, level=Severity.CRITICAL, engine=engine)
        engine.registry.enable_trace("physics")

        log.trace("physics", {"vx": 1.5})

        assert console_sink.plain[0].endswith("[TRACE:physics] game/player.py:12 (Quiet#001) {'vx': 1.5}")

    def test_disable_trace(self, player, engine, console_sink):
        engine.registry.enable_trace("physics")
        player.trace("physics", 1)
        engine.registry.disable_trace("physics")
        player.trace("physics", 2)

        assert len(console_sink.lines) == 1

    def test_trace_file_gated_by_allowlist(self, player, console_sink, run_dir):
        """В файл трасса пишется по allowlist, даже если выключена глобально."""
        player.enable_file_logging(["physics"])
        player.trace("physics", 42)

        assert console_sink.lines == []
        assert read_log(run_dir / "Player-001.log")[0].endswith("[TRACE:physics] game/player.py:12 (Player#001) 42")

    @pytest.mark.parametrize("name", [Severity.INFO, 3, None])
    def test_non_string_name_rejected(self, player, console_sink, name):
        """Уровень вместо имени трассы - ошибка, а не запись [INFO]."""
        player.enable_file_logging()

        with pytest.raises(TypeError, match="Unsupported trace name"):
            player.trace(name, 1)

        assert console_sink.lines == []

    def test_trace_not_in_default_allowlist(self, player, engine, run_dir):
        engine.registry.enable_trace("physics")
        player.enable_file_logging()
        player.trace("physics", 42)

        assert not (run_dir / "Player-001.log").exists()


class TestFileLogging:
    """Тесты enable/disable_file_logging()."""

    def test_empty_means_all_severities(self, player):
        player.enable_file_logging([])
        assert player.file_logging_kinds() == frozenset(Severity)

    def test_restricted(self, player):
        player.enable_file_logging([Severity.WARNING])
        assert player.file_logging_kinds() == {Severity.WARNING}

    def test_file_matches_console_plain(self, player, console_sink, run_dir):
        player.enable_file_logging()
        player.info("hello [world]")

        assert read_log(run_dir / "Player-001.log") == console_sink.plain

    def test_repeated_writes_differ_only_in_timestamp(self, player, clock, run_dir):
        player.enable_file_logging()
        player.info("tick")
        clock.advance(1)
        player.info("tick")

        first, second = read_log(run_dir / "Player-001.log")
        assert first == "[14:20:02] [INFO] game/player.py:12 (Player#001) tick"
        assert second == "[14:20:03] [INFO] game/player.py:12 (Player#001) tick"

    def test_disable_subset(self, player, run_dir):
        player.enable_file_logging()
        player.disable_file_logging([Severity.INFO])

        player.info("console only")
        player.warning("both")

        lines = read_log(run_dir / "Player-001.log")
        assert len(lines) == 1
        assert lines[0].endswith("both")

    def test_disable_all(self, player, run_dir):
        player.enable_file_logging()
        player.disable_file_logging()
        player.critical("console only")

        assert not run_dir.exists()

    def test_no_directory_without_file_logging(self, player, logs_root):
        player.critical("console only")
        assert not logs_root.exists()


class TestRename:
    """Тесты set_instance_name() / set_instance_id()."""

    def test_rename_preserves_configuration(self, player, engine):
        player.set_level(Severity.DEBUG)
        player.enable_file_logging([Severity.ERROR, "ai"])

        player.set_instance_name("Hero")

        assert player.instance_key == "Hero#001"
        assert player.get_level() is Severity.DEBUG
        assert player.file_logging_kinds() == {Severity.ERROR, "ai"}
        assert engine.registry.get_entry("Player#001") is None
        assert engine.registry.get_level("Player#001") is Severity.INFO

    def test_rename_changes_output(self, player, console_sink, run_dir):
        player.enable_file_logging()
        player.set_instance_name("Hero")
        player.info("renamed")

        assert "(Hero#001)" in console_sink.plain[0]
        assert (run_dir / "Hero-001.log").exists()

    def test_set_instance_id(self, player, engine):
        player.set_level(Severity.ERROR)

        player.set_instance_id("_boss")
        assert player.instance_key == "Player_boss"
        assert player.instance_id == NamedId("_boss")
        assert player.get_level() is Severity.ERROR

        player.set_instance_id(None)
        assert player.instance_key == "Player"
        assert player.instance_id == NoId()
        assert engine.registry.list_instance_keys() == ["Player"]

    def test_rename_after_key_vanished(self, player, engine):
        """Если старого ключа нет, новый всё равно регистрируется."""
        engine.registry.rename("Player#001", "Elsewhere")
        player.set_instance_name("Hero")

        assert "Hero#001" in engine.registry.list_instance_keys()

    def test_rename_onto_existing_instance(self, player, engine, console_sink):
        """Настройки уже зарегистрированного экземпляра не перезаписываются."""
        hero = InstanceLogger("Hero", 1, level=Severity.ERROR, engine=engine)
        hero.enable_file_logging([Severity.CRITICAL])
        player.set_level(Severity.DEBUG)

        player.set_instance_name("Hero")

        assert hero.get_level() is Severity.ERROR
        assert hero.file_logging_kinds() == {Severity.CRITICAL}
        assert player.get_level() is Severity.ERROR
        assert engine.registry.list_instance_keys() == ["Hero#001"]
        assert "Instance key Hero#001 already registered" in console_sink.plain[0]


class TestInstanceIds:
    """Тесты автоматических id."""

    def test_sequential_ids(self, engine):
        first = InstanceLogger("Enemy", engine=engine)
        second = InstanceLogger("Enemy", engine=engine)

        assert isinstance(first.instance_id, NumericId)
        assert second.instance_id.value == first.instance_id.value + 1
        assert first.instance_key != second.instance_key

    def test_explicit_id_kept(self, engine):
        log = InstanceLogger("Enemy", 42, engine=engine)
        assert log.instance_key == "Enemy#042"

    def test_concurrent_construction(self, engine):
        loggers: list[InstanceLogger] = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                log = InstanceLogger("Bullet", engine=engine)
                with lock:
                    loggers.append(log)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        keys = {log.instance_key for log in loggers}
        assert len(keys) == 200
        assert keys == set(engine.registry.list_instance_keys())


def test_repr(player):
    assert repr(player) == "InstanceLogger('Player#001', level=INFO)"
