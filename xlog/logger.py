#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志记录器模块
==============

基于 loguru 构建 Logger。每个 Logger 在 loguru 中拥有自己的处理器，
通过绑定在 extra 中的路由键区分，因此多个 Logger 可以同时存在，
输出目标、级别互不干扰。

输出目标:
    - filename 为空: 标准输出，不轮转
    - filename 非空: 由 loguru 按大小轮转的文件，不会写标准输出

两种调用方式:
    Logger        严格接口，消息 + Field 结构化字段
    SugaredLogger 宽松接口，每个级别提供三种风格:
                  info(*args)               print 风格，参数以空格拼接
                  infof(template, *args)    printf 风格，使用 % 格式化
                  infow(msg, *kv, **fields) 键值对风格

级别语义:
    - PANIC: 写出日志后抛出 PanicError
    - FATAL: 写出日志并刷新输出后以状态码 1 结束进程
    这两种行为与级别过滤无关，总会发生。

使用示例:
    >>> log = build(with_filename("logs/app.log"), with_string_level("debug"))
    >>> log.info("服务启动", Field.integer("port", 8080))
    >>> log.sugar().infof("处理了 %d 条记录", 42)
"""

import functools
import itertools
import os
import sys
import weakref
from collections.abc import Mapping

from loguru import logger as engine

from .encoding import FIELDS_KEY, INTERNAL_PREFIX, console_format
from .errors import PanicError
from .fields import Field, fields_to_dict
from .levels import Level
from .options import DEFAULT_CONFIG, build_config
from .rotation import file_sink_options

# 记录所属 Logger 的路由键
SINK_KEY = INTERNAL_PREFIX + "sink"

# 公开方法 -> _log，两层栈帧
_BASE_DEPTH = 2

_sink_ids = itertools.count(1)


def _accepts(key, record):
    return record["extra"].get(SINK_KEY) == key


class _Sink:
    """
    一个 loguru 处理器

    只接收 extra 中路由键与自身一致的记录。过滤函数只引用路由键，
    loguru 不持有本对象；所有使用它的 Logger 都被回收后处理器随之移除。
    """

    def __init__(self, config):
        self.key = next(_sink_ids)
        self.config = config
        self.handler_id = None
        self._finalizer = None

    def open(self):
        config = self.config
        if config.filename:
            target, options = config.filename, file_sink_options(config)
        else:
            target, options = sys.stdout, {}
        # 创建失败（权限、路径非法）直接向上抛出
        self.handler_id = engine.add(
            target,
            level=int(config.level),
            format=console_format,
            filter=functools.partial(_accepts, self.key),
            **options
        )
        self._finalizer = weakref.finalize(self, engine.remove, self.handler_id)

    def close(self):
        # finalize 只会执行一次，重复关闭无副作用
        if self._finalizer is not None:
            self._finalizer()
        self.handler_id = None


def _terminate():
    """刷新所有输出后结束进程"""
    engine.complete()
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    os._exit(1)


class Logger:
    """
    严格接口的日志记录器

    Attributes:
        config: 构建该 Logger 使用的配置
        level: 最低输出级别
    """

    def __init__(self, sink, caller_skip=0, fields=None):
        self._sink = sink
        self._caller_skip = caller_skip
        self._fields = dict(fields or {})
        self._engine = engine.bind(**{SINK_KEY: sink.key})

    @property
    def config(self):
        return self._sink.config

    @property
    def level(self) -> Level:
        return self._sink.config.level

    def enabled(self, level: Level) -> bool:
        """该级别的日志是否会被写出"""
        return level >= self.level

    def _log(self, level, message, fields=None, depth=0):
        """
        写出一条记录

        调用栈必须是 调用方 -> 公开方法 -> _log，
        depth 用于在中间多出栈帧时修正调用位置。
        """
        if self.enabled(level):
            merged = dict(self._fields)
            merged.update(fields or {})
            bound = self._engine.bind(**{FIELDS_KEY: merged})
            bound.opt(depth=_BASE_DEPTH + self._caller_skip + depth).log(
                level.engine_name, message
            )
        if level is Level.PANIC:
            raise PanicError(message)
        if level is Level.FATAL:
            _terminate()

    def log(self, level: Level, msg: str, *fields: Field) -> None:
        self._log(level, msg, fields_to_dict(fields))

    def debug(self, msg: str, *fields: Field) -> None:
        self._log(Level.DEBUG, msg, fields_to_dict(fields))

    def info(self, msg: str, *fields: Field) -> None:
        self._log(Level.INFO, msg, fields_to_dict(fields))

    def warn(self, msg: str, *fields: Field) -> None:
        self._log(Level.WARN, msg, fields_to_dict(fields))

    def error(self, msg: str, *fields: Field) -> None:
        self._log(Level.ERROR, msg, fields_to_dict(fields))

    def panic(self, msg: str, *fields: Field) -> None:
        """写出日志后抛出 PanicError"""
        self._log(Level.PANIC, msg, fields_to_dict(fields))

    def fatal(self, msg: str, *fields: Field) -> None:
        """写出日志后结束进程"""
        self._log(Level.FATAL, msg, fields_to_dict(fields))

    def _derive(self, caller_skip=0, fields=None):
        merged = dict(self._fields)
        merged.update(fields or {})
        return Logger(self._sink, self._caller_skip + caller_skip, merged)

    def with_options(self, caller_skip: int = 0, fields=()) -> "Logger":
        """
        派生新的 Logger，共用同一个输出目标

        Args:
            caller_skip: 额外跳过的调用栈层数，累加到当前值上
            fields: 每条记录都附带的 Field

        Returns:
            Logger: 新的 Logger，原 Logger 不受影响
        """
        return self._derive(caller_skip, fields_to_dict(fields))

    def with_fields(self, *fields: Field) -> "Logger":
        return self._derive(fields=fields_to_dict(fields))

    def sugar(self) -> "SugaredLogger":
        return SugaredLogger(self)

    def sync(self) -> None:
        """等待 loguru 处理完所有记录"""
        engine.complete()

    def close(self) -> None:
        """
        移除输出目标

        从同一个 Logger 派生出的所有 Logger 共用输出目标，会一起失效。
        """
        self._sink.close()


def _sprint(args):
    return " ".join(str(arg) for arg in args)


def _sprintf(template, args):
    if not args:
        return template
    # 与标准库 logging 一致，单个字典参数按名称格式化
    if len(args) == 1 and isinstance(args[0], Mapping):
        args = args[0]
    try:
        return template % args
    except (TypeError, ValueError, KeyError):
        # 模板与参数不匹配时保留原始内容
        return f"{template} {args!r}"


class SugaredLogger:
    """
    宽松接口的日志记录器

    通过 Logger.sugar() 获得，与原 Logger 共用输出目标和级别。
    """

    def __init__(self, base: Logger):
        self._base = base

    def desugar(self) -> Logger:
        return self._base

    def with_fields(self, *args, **kwargs) -> "SugaredLogger":
        """按键值对风格附加字段，返回新的 SugaredLogger"""
        return SugaredLogger(self._base._derive(fields=self._sweeten(args, kwargs)))

    def _sweeten(self, args, kwargs):
        """
        把交替出现的键值对转换为字段字典

        参数中可以混入 Field。末尾缺少值的键、非字符串的键都会被
        忽略，并额外记录一条 ERROR 日志。
        """
        fields = {}
        invalid = []
        i = 0
        while i < len(args):
            arg = args[i]
            if isinstance(arg, Field):
                fields[arg.key] = arg.value
                i += 1
                continue
            if i == len(args) - 1:
                self._base._log(Level.ERROR, "忽略了没有值的键", {"ignored": arg}, depth=1)
                break
            key, value = arg, args[i + 1]
            if isinstance(key, str):
                fields[key] = value
            else:
                invalid.append((key, value))
            i += 2
        if invalid:
            self._base._log(Level.ERROR, "忽略了键不是字符串的键值对", {"invalid": invalid}, depth=1)
        fields.update(kwargs)
        return fields

    def debug(self, *args):
        self._base._log(Level.DEBUG, _sprint(args))

    def debugf(self, template, *args):
        self._base._log(Level.DEBUG, _sprintf(template, args))

    def debugw(self, msg, *keys_and_values, **fields):
        self._base._log(Level.DEBUG, msg, self._sweeten(keys_and_values, fields))

    def info(self, *args):
        self._base._log(Level.INFO, _sprint(args))

    def infof(self, template, *args):
        self._base._log(Level.INFO, _sprintf(template, args))

    def infow(self, msg, *keys_and_values, **fields):
        self._base._log(Level.INFO, msg, self._sweeten(keys_and_values, fields))

    def warn(self, *args):
        self._base._log(Level.WARN, _sprint(args))

    def warnf(self, template, *args):
        self._base._log(Level.WARN, _sprintf(template, args))

    def warnw(self, msg, *keys_and_values, **fields):
        self._base._log(Level.WARN, msg, self._sweeten(keys_and_values, fields))

    def error(self, *args):
        self._base._log(Level.ERROR, _sprint(args))

    def errorf(self, template, *args):
        self._base._log(Level.ERROR, _sprintf(template, args))

    def errorw(self, msg, *keys_and_values, **fields):
        self._base._log(Level.ERROR, msg, self._sweeten(keys_and_values, fields))

    def panic(self, *args):
        self._base._log(Level.PANIC, _sprint(args))

    def panicf(self, template, *args):
        self._base._log(Level.PANIC, _sprintf(template, args))

    def panicw(self, msg, *keys_and_values, **fields):
        self._base._log(Level.PANIC, msg, self._sweeten(keys_and_values, fields))

    def fatal(self, *args):
        self._base._log(Level.FATAL, _sprint(args))

    def fatalf(self, template, *args):
        self._base._log(Level.FATAL, _sprintf(template, args))

    def fatalw(self, msg, *keys_and_values, **fields):
        self._base._log(Level.FATAL, msg, self._sweeten(keys_and_values, fields))


def new(config=None) -> Logger:
    """
    根据配置构建 Logger

    Args:
        config: Config 对象，为 None 时使用默认配置

    Returns:
        Logger: 可直接使用的 Logger

    Raises:
        OSError: 日志文件无法创建时由 loguru 抛出
    """
    sink = _Sink(config or DEFAULT_CONFIG)
    sink.open()
    return Logger(sink)


def build(*options) -> Logger:
    """应用 Option 后构建 Logger，等价于 new(build_config(*options))"""
    return new(build_config(*options))
