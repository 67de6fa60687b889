#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logger 构建与输出测试

验证输出目标选择、级别过滤、编码格式、调用位置以及
SugaredLogger 的三种调用风格。
"""

import gc
import re

import pytest
from loguru import logger as engine

from xlog.errors import PanicError
from xlog.fields import Field
from xlog.levels import Level
from xlog.logger import build
from xlog.options import with_compress, with_filename, with_level, with_string_level

from logparse import lines as _lines, parse as _parse


# ============================================================
# 输出目标
# ============================================================

def test_empty_filename_writes_to_stdout(make_logger, capsys) -> None:
    log = make_logger()
    log.info("hello")
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert len(records) == 1
    assert records[0]["level"] == "INFO"
    assert records[0]["message"] == "hello"


def test_filename_writes_only_to_file(make_logger, capsys, tmp_path) -> None:
    path = tmp_path / "logs" / "app.log"
    log = make_logger(with_filename(str(path)), with_compress(False))
    log.info("to file")
    log.close()

    captured = capsys.readouterr()
    assert captured.out == ""
    records = [_parse(line) for line in _lines(path.read_text(encoding="utf-8"))]
    assert [r["message"] for r in records] == ["to file"]


def test_unwritable_path_propagates(make_logger, tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        make_logger(with_filename(str(blocker / "app.log")))


def test_loggers_do_not_see_each_other(make_logger, capsys, tmp_path) -> None:
    path = tmp_path / "other.log"
    console = make_logger()
    to_file = make_logger(with_filename(str(path)))
    console.info("console only")
    to_file.info("file only")
    to_file.close()

    assert [_parse(l)["message"] for l in _lines(capsys.readouterr().out)] == ["console only"]
    assert [_parse(l)["message"] for l in _lines(path.read_text(encoding="utf-8"))] == ["file only"]


# ============================================================
# 级别过滤
# ============================================================

def test_records_below_level_are_discarded(make_logger, capsys) -> None:
    log = make_logger(with_string_level("warn"))
    log.debug("d")
    log.info("i")
    log.warn("w")
    log.error("e")
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert [r["level"] for r in records] == ["WARN", "ERROR"]
    assert not log.enabled(Level.INFO)
    assert log.enabled(Level.FATAL)


@pytest.mark.parametrize("threshold", list(Level))
def test_each_threshold_filters_exactly(make_logger, capsys, fake_exit, threshold) -> None:
    log = make_logger(with_level(threshold))
    for level in (Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR):
        log.log(level, level.name)
    with pytest.raises(PanicError):
        log.panic("PANIC")
    with pytest.raises(SystemExit):
        log.fatal("FATAL")
    messages = [_parse(line)["message"] for line in _lines(capsys.readouterr().out)]
    assert messages == [lv.name for lv in Level if lv >= threshold]
    assert fake_exit == [1]


def test_repeated_calls_append_records(make_logger, capsys) -> None:
    log = make_logger()
    log.info("same")
    log.info("same")
    assert len(_lines(capsys.readouterr().out)) == 2


# ============================================================
# 编码与调用位置
# ============================================================

def test_line_starts_with_iso8601_time(make_logger, capsys) -> None:
    make_logger().info("hello")
    out = capsys.readouterr().out
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{4}\tINFO\t", out)


def test_caller_location_is_call_site(make_logger, capsys) -> None:
    log = make_logger()
    log.info("here")
    log.sugar().infof("there %s", 1)
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert [r["function"] for r in records] == ["test_caller_location_is_call_site"] * 2
    assert records[1]["line"] == records[0]["line"] + 1


def test_strict_fields_rendered_as_json(make_logger, capsys) -> None:
    log = make_logger()
    log.info("done", Field.integer("count", "3"), Field.string("who", 5), Field.error(ValueError("bad")))
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["fields"] == {"count": 3, "who": "5", "error": "bad"}


def test_with_fields_binds_to_every_record(make_logger, capsys) -> None:
    log = make_logger().with_fields(Field.string("service", "api"))
    log.info("one")
    log.warn("two", Field.boolean("retry", 1))
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert records[0]["fields"] == {"service": "api"}
    assert records[1]["fields"] == {"service": "api", "retry": True}


def test_with_options_caller_skip(make_logger, capsys) -> None:
    def helper(log):
        log.info("from helper")

    helper(make_logger().with_options(caller_skip=1))
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["function"] == "test_with_options_caller_skip"


def test_field_names_never_affect_routing(make_logger, capsys) -> None:
    sugar = make_logger().sugar()
    sugar.infow("routed", "_xlog_sink", 999)
    sugar.infow("prefixed", "_xlog_trace", "t-1")
    make_logger().info("strict", Field.integer("_xlog_sink", 0))
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert [r["message"] for r in records] == ["routed", "prefixed", "strict"]
    assert records[0]["fields"] == {"_xlog_sink": 999}
    assert records[1]["fields"] == {"_xlog_trace": "t-1"}
    assert records[2]["fields"] == {"_xlog_sink": 0}


def test_message_braces_are_literal(make_logger, capsys) -> None:
    make_logger().info("value={value} <red>")
    assert _parse(_lines(capsys.readouterr().out)[0])["message"] == "value={value} <red>"


# ============================================================
# SugaredLogger
# ============================================================

def test_print_style_joins_with_spaces(make_logger, capsys) -> None:
    make_logger().sugar().info("loaded", 3, "files", None)
    assert _parse(_lines(capsys.readouterr().out)[0])["message"] == "loaded 3 files None"


def test_printf_style(make_logger, capsys) -> None:
    sugar = make_logger().sugar()
    sugar.infof("%d items in %s", 3, "box")
    sugar.infof("%(name)s ok", {"name": "db"})
    sugar.infof("100%")
    sugar.infof("%d", "x")
    messages = [_parse(line)["message"] for line in _lines(capsys.readouterr().out)]
    assert messages == ["3 items in box", "db ok", "100%", "%d ('x',)"]


def test_keyed_style(make_logger, capsys) -> None:
    make_logger().sugar().infow("request", "path", "/api", Field.integer("status", 200), user="bob")
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["message"] == "request"
    assert record["fields"] == {"path": "/api", "status": 200, "user": "bob"}


def test_keyed_style_dangling_key(make_logger, capsys) -> None:
    make_logger().sugar().infow("request", "path", "/api", "orphan")
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert records[0]["level"] == "ERROR"
    assert records[0]["fields"] == {"ignored": "orphan"}
    assert records[0]["function"] == "test_keyed_style_dangling_key"
    assert records[1]["fields"] == {"path": "/api"}


def test_keyed_style_non_string_keys(make_logger, capsys) -> None:
    make_logger().sugar().warnw("odd", 1, "one", "ok", True)
    records = [_parse(line) for line in _lines(capsys.readouterr().out)]
    assert records[0]["level"] == "ERROR"
    assert records[0]["fields"] == {"invalid": [[1, "one"]]}
    assert records[1]["level"] == "WARN"
    assert records[1]["fields"] == {"ok": True}


def test_sugar_round_trip(make_logger) -> None:
    log = make_logger()
    assert log.sugar().desugar() is log


def test_sugared_with_fields(make_logger, capsys) -> None:
    sugar = make_logger().sugar().with_fields("request_id", "r-1")
    sugar.errorf("failed after %d tries", 2)
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["fields"] == {"request_id": "r-1"}
    assert record["message"] == "failed after 2 tries"


# ============================================================
# PANIC / FATAL
# ============================================================

def test_panic_logs_then_raises(make_logger, capsys) -> None:
    with pytest.raises(PanicError, match="boom 1"):
        make_logger().sugar().panicf("boom %d", 1)
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["level"] == "PANIC"
    assert record["message"] == "boom 1"


def test_panic_raises_even_when_filtered(make_logger, capsys) -> None:
    log = make_logger(with_level(Level.FATAL))
    with pytest.raises(PanicError):
        log.panic("quiet")
    assert capsys.readouterr().out == ""


def test_fatal_logs_then_exits(make_logger, capsys, fake_exit) -> None:
    with pytest.raises(SystemExit):
        make_logger().sugar().fatalw("giving up", "reason", "disk")
    assert fake_exit == [1]
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["level"] == "FATAL"
    assert record["fields"] == {"reason": "disk"}


# ============================================================
# 处理器生命周期
# ============================================================

def test_unreferenced_logger_releases_handler() -> None:
    log = build()
    handler_id = log._sink.handler_id
    del log
    gc.collect()
    with pytest.raises(ValueError):
        engine.remove(handler_id)


def test_derived_logger_keeps_shared_handler(capsys) -> None:
    log = build()
    derived = log.with_fields(Field.string("service", "api"))
    del log
    gc.collect()
    derived.info("still here")
    record = _parse(_lines(capsys.readouterr().out)[0])
    assert record["fields"] == {"service": "api"}
    derived.close()


def test_close_is_idempotent(make_logger) -> None:
    log = make_logger()
    log.close()
    log.close()
    assert log._sink.handler_id is None
