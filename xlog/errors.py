#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
异常定义
========

xlog 抛出的全部异常都继承自 XlogError。
日志输出目标（文件、标准输出）创建失败时抛出的 OSError 不做包装，原样向上传递。
"""


class XlogError(Exception):
    """xlog 基础异常类"""
    pass


class PanicError(XlogError):
    """
    PANIC 级别日志写出后抛出的异常

    Attributes:
        message: 触发 panic 的日志消息
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConfigError(XlogError, ValueError):
    """配置来源（环境变量、字典）中的值无法解析"""

    def __init__(self, key, value, expected):
        super().__init__(f"无法解析配置项 {key}={value!r}，期望 {expected}")
        self.key = key
        self.value = value
