#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
全局日志入口
============

保存进程内唯一的默认 Logger 及其宽松版本，并提供按级别划分的
全局函数，调用方无需持有 Logger 实例。

默认 Logger:
    - 模块加载时以默认配置自动创建（输出到标准输出，INFO 级别）
    - init() 可以随时替换，最后一次调用生效
    - 替换后，此前取得的 Logger 仍按原配置工作
    - 全局函数总是转发给调用时刻的默认 Logger
    - 被替换且不再被引用的 Logger 会在回收时移除自己的 loguru 处理器

每个级别提供四个函数，以 info 为例:
    info(*args)                 print 风格
    infof(template, *args)      printf 风格
    infow(msg, *kv, **fields)   键值对风格
    infoz(msg, *fields)         严格 Field 风格，直接使用 Logger

调用位置:
    默认 Logger 额外跳过一层调用栈，日志中记录的是调用全局函数的位置，
    而不是本模块。

线程安全:
    Logger 与 SugaredLogger 作为一个元组整体替换，读取方不会看到
    新旧混合的一对。写入的顺序由 loguru 自身保证。
"""

from loguru import logger as engine

from .logger import build

# 全局函数本身占用的栈帧数
_FACADE_SKIP = 1

_defaults = None


def _install(base):
    global _defaults
    base = base.with_options(caller_skip=_FACADE_SKIP)
    _defaults = (base, base.sugar())
    return base


def init(*options):
    """
    使用 Option 重新构建并安装默认 Logger

    Args:
        *options: 按顺序应用的配置值

    Returns:
        Logger: 新的默认 Logger

    Raises:
        OSError: 日志文件无法创建时抛出，原默认 Logger 保持不变
    """
    return _install(build(*options))


def get_logger():
    """当前默认 Logger（已跳过一层调用栈，适合被包装后调用）"""
    return _defaults[0]


def get_sugared_logger():
    """当前默认 SugaredLogger"""
    return _defaults[1]


def with_options(caller_skip=0, fields=()):
    """
    从默认 Logger 派生一个可直接调用的 Logger

    派生结果不再包含全局函数那一层栈帧。

    Args:
        caller_skip: 额外跳过的调用栈层数
        fields: 每条记录都附带的 Field

    Returns:
        Logger: 新的 Logger
    """
    return _defaults[0].with_options(caller_skip=caller_skip - _FACADE_SKIP, fields=fields)


def sync():
    """等待默认 Logger 写完所有记录"""
    _defaults[0].sync()


# ============================================================
# DEBUG
# ============================================================

def debug(*args):
    _defaults[1].debug(*args)


def debugf(template, *args):
    _defaults[1].debugf(template, *args)


def debugw(msg, *keys_and_values, **fields):
    _defaults[1].debugw(msg, *keys_and_values, **fields)


def debugz(msg, *fields):
    _defaults[0].debug(msg, *fields)


# ============================================================
# INFO
# ============================================================

def info(*args):
    _defaults[1].info(*args)


def infof(template, *args):
    _defaults[1].infof(template, *args)


def infow(msg, *keys_and_values, **fields):
    _defaults[1].infow(msg, *keys_and_values, **fields)


def infoz(msg, *fields):
    _defaults[0].info(msg, *fields)


# ============================================================
# WARN
# ============================================================

def warn(*args):
    _defaults[1].warn(*args)


def warnf(template, *args):
    _defaults[1].warnf(template, *args)


def warnw(msg, *keys_and_values, **fields):
    _defaults[1].warnw(msg, *keys_and_values, **fields)


def warnz(msg, *fields):
    _defaults[0].warn(msg, *fields)


# ============================================================
# ERROR
# ============================================================

def error(*args):
    _defaults[1].error(*args)


def errorf(template, *args):
    _defaults[1].errorf(template, *args)


def errorw(msg, *keys_and_values, **fields):
    _defaults[1].errorw(msg, *keys_and_values, **fields)


def errorz(msg, *fields):
    _defaults[0].error(msg, *fields)


# ============================================================
# PANIC（写出后抛出 PanicError）
# ============================================================

def panic(*args):
    _defaults[1].panic(*args)


def panicf(template, *args):
    _defaults[1].panicf(template, *args)


def panicw(msg, *keys_and_values, **fields):
    _defaults[1].panicw(msg, *keys_and_values, **fields)


def panicz(msg, *fields):
    _defaults[0].panic(msg, *fields)


# ============================================================
# FATAL（写出后结束进程）
# ============================================================

def fatal(*args):
    _defaults[1].fatal(*args)


def fatalf(template, *args):
    _defaults[1].fatalf(template, *args)


def fatalw(msg, *keys_and_values, **fields):
    _defaults[1].fatalw(msg, *keys_and_values, **fields)


def fatalz(msg, *fields):
    _defaults[0].fatal(msg, *fields)


# loguru 自带一个 stderr 处理器，会与默认 Logger 重复输出，加载时移除
try:
    engine.remove(0)
except ValueError:
    pass

# 模块加载时自动初始化默认日志配置
_install(build())
