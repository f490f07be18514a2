"""Tests for the mapping load engine."""

import json

import pytest

from shared.config import AlloyConfig
from shared.logger import AlloyLogger

from mappings.core.engine import MappingEngine
from mappings.core.errors import MalformedMappingError, MappingLoadError


@pytest.fixture
def engine():
    return MappingEngine(logger=AlloyLogger("tests.engine", console_output=False))


def test_load_publishes_table(engine, sample_file):
    assert not engine.loaded

    table = engine.load(sample_file)

    assert engine.loaded
    assert engine.table is table
    assert engine.source == sample_file
    assert table.find_class("abc").deobfuscated_name == "net/minecraft/world/level/Level"


def test_table_before_load_raises(engine):
    with pytest.raises(MappingLoadError):
        engine.table


def test_missing_file_raises_os_error(engine, tmp_path):
    with pytest.raises(FileNotFoundError):
        engine.load(tmp_path / "missing.txt")
    assert not engine.loaded


def test_malformed_file_keeps_previous_table(engine, sample_file, tmp_path):
    good = engine.load(sample_file)
    bad = tmp_path / "bad.txt"
    bad.write_text("    int orphan -> a\n", encoding="utf-8")

    with pytest.raises(MalformedMappingError):
        engine.load(bad)

    assert engine.table is good
    assert engine.source == sample_file


def test_reload_swaps_in_a_new_table(engine, sample_file):
    first = engine.load(sample_file)
    sample_file.write_text("a.B -> c:\n    int x -> y\n", encoding="utf-8")

    second = engine.reload()

    assert second is not first
    assert engine.table is second
    assert [cm.obfuscated_name for cm in second] == ["c"]
    # The old table is untouched.
    assert len(first) == 2


def test_reload_before_load_raises(engine):
    with pytest.raises(MappingLoadError):
        engine.reload()


def test_size_limit(sample_file):
    config = AlloyConfig()
    config.mappings.max_file_size = 10
    engine = MappingEngine(config, AlloyLogger("tests.engine", console_output=False))

    with pytest.raises(MappingLoadError, match="too large"):
        engine.load(sample_file)


def test_drop_inlined_methods_follows_config(tmp_path):
    path = tmp_path / "inlined.txt"
    path.write_text("a.B -> c:\n    void other.Class.bridge() -> c\n", encoding="utf-8")
    config = AlloyConfig()
    config.mappings.drop_inlined_methods = False
    engine = MappingEngine(config, AlloyLogger("tests.engine", console_output=False))

    table = engine.load(path)

    assert table.stats.method_count == 1


def test_build_does_not_publish(engine, sample_text):
    table = engine.build(sample_text)
    assert len(table) == 2
    assert not engine.loaded


def test_json_log_file_records_load(sample_file, tmp_path):
    log_file = tmp_path / "logs" / "alloy.log"
    logger = AlloyLogger(
        "tests.engine.json", log_file=log_file, json_logs=True, console_output=False
    )
    MappingEngine(logger=logger).load(sample_file)
    for handler in logger.underlying.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert '"operation": "load"' in content
    assert '"class_count": 2' in content


def _json_records(logger, log_file):
    for handler in logger.underlying.handlers:
        handler.flush()
    return [
        json.loads(line)
        for line in log_file.read_text(encoding="utf-8").splitlines()
    ]


def test_failed_load_is_logged_before_raising(tmp_path):
    log_file = tmp_path / "alloy.log"
    logger = AlloyLogger(
        "tests.engine.failure", log_file=log_file, json_logs=True, console_output=False
    )
    bad = tmp_path / "bad.txt"
    bad.write_text("    int orphan -> a\n", encoding="utf-8")

    with pytest.raises(MalformedMappingError):
        MappingEngine(logger=logger).load(bad)

    [record] = [r for r in _json_records(logger, log_file) if r["level"] == "ERROR"]
    assert record["operation"] == "load"
    assert record["extra"]["source"] == str(bad)


def test_failed_reload_logs_warning(sample_file, tmp_path):
    log_file = tmp_path / "alloy.log"
    logger = AlloyLogger(
        "tests.engine.reload", log_file=log_file, json_logs=True, console_output=False
    )
    engine = MappingEngine(logger=logger)
    engine.load(sample_file)
    sample_file.write_text("not a header\n    int x\n", encoding="utf-8")

    with pytest.raises(MalformedMappingError):
        engine.reload()

    levels = [r["level"] for r in _json_records(logger, log_file)]
    assert "WARNING" in levels
    assert len(engine.table) == 2
