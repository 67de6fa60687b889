#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
xlog 全局日志包
==============

基于 loguru 的进程级日志封装。导入即可使用默认 Logger，
也可以通过 Option 重新配置输出文件、级别和轮转策略。

模块结构:
    - levels: 日志级别及文本解析
    - options: 配置对象与 Option
    - loaders: 从字典、环境变量读取配置
    - fields: 强类型结构化字段
    - logger: Logger / SugaredLogger 及构建函数
    - rotation: 文件轮转参数适配
    - facade: 全局默认 Logger 与按级别划分的全局函数

使用示例:
    >>> import xlog
    >>> xlog.info("服务启动")
    >>> xlog.init(xlog.with_filename("logs/app.log"), xlog.with_string_level("debug"))
    >>> xlog.debugf("处理了 %d 条记录", 42)
    >>> xlog.infow("请求完成", "path", "/api", "status", 200)
    >>> xlog.errorz("写入失败", xlog.Field.error(exc))
"""

from .errors import ConfigError, PanicError, XlogError
from .facade import (
    debug, debugf, debugw, debugz,
    error, errorf, errorw, errorz,
    fatal, fatalf, fatalw, fatalz,
    get_logger,
    get_sugared_logger,
    info, infof, infow, infoz,
    init,
    panic, panicf, panicw, panicz,
    sync,
    warn, warnf, warnw, warnz,
    with_options,
)
from .fields import Field
from .levels import Level, parse_level
from .loaders import options_from_env, options_from_mapping
from .logger import Logger, SugaredLogger, build, new
from .options import (
    DEFAULT_CONFIG,
    Config,
    Option,
    build_config,
    with_compress,
    with_filename,
    with_level,
    with_local_time,
    with_max_age,
    with_max_backups,
    with_max_size,
    with_string_level,
)

__all__ = [
    'Level', 'parse_level',
    'Config', 'DEFAULT_CONFIG', 'Option', 'build_config',
    'with_level', 'with_string_level', 'with_filename', 'with_max_size',
    'with_max_backups', 'with_max_age', 'with_local_time', 'with_compress',
    'options_from_env', 'options_from_mapping',
    'Field',
    'Logger', 'SugaredLogger', 'new', 'build',
    'init', 'get_logger', 'get_sugared_logger', 'with_options', 'sync',
    'debug', 'debugf', 'debugw', 'debugz',
    'info', 'infof', 'infow', 'infoz',
    'warn', 'warnf', 'warnw', 'warnz',
    'error', 'errorf', 'errorw', 'errorz',
    'panic', 'panicf', 'panicw', 'panicz',
    'fatal', 'fatalf', 'fatalw', 'fatalz',
    'XlogError', 'PanicError', 'ConfigError',
]

__version__ = '1.0.0'
