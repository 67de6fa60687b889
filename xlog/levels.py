#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志级别模块
============

定义六个有序的日志级别，并负责把它们映射到 loguru 的级别名称。

级别顺序:
    DEBUG < INFO < WARN < ERROR < PANIC < FATAL

数值与 loguru 内置级别对齐（DEBUG=10, INFO=20, WARNING=30, ERROR=40）。
输出中的级别名称与枚举名一致: WARN、PANIC、FATAL 是额外注册到 loguru
的自定义级别，WARN 与内置的 WARNING 同为 30，不使用 WARNING 这个名称。
"""

from enum import IntEnum

from loguru import logger


class Level(IntEnum):
    """日志级别，数值越大越重要"""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    PANIC = 45
    FATAL = 50

    @property
    def engine_name(self) -> str:
        """该级别在 loguru 中的名称"""
        return _ENGINE_NAMES[self]


_ENGINE_NAMES = {
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARN: "WARN",
    Level.ERROR: "ERROR",
    Level.PANIC: "PANIC",
    Level.FATAL: "FATAL",
}

# 文本到级别的映射，区分大小写
_TEXT_LEVELS = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "error": Level.ERROR,
    "panic": Level.PANIC,
    "fatal": Level.FATAL,
}


def parse_level(text) -> Level:
    """
    将文本级别名称解析为 Level

    只识别小写的 debug/info/warn/error/panic/fatal，
    其他任何输入（包括空字符串和 None）都回落到 INFO，不会抛出异常。

    Args:
        text: 级别名称

    Returns:
        Level: 解析得到的级别
    """
    if not isinstance(text, str):
        return Level.INFO
    return _TEXT_LEVELS.get(text, Level.INFO)


def _register_level(name, no, color):
    # loguru 不允许重复注册同名级别
    try:
        logger.level(name)
    except ValueError:
        logger.level(name, no=no, color=color)


_register_level("WARN", int(Level.WARN), "<yellow><bold>")
_register_level("PANIC", int(Level.PANIC), "<red>")
_register_level("FATAL", int(Level.FATAL), "<RED><bold>")
