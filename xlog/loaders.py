#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置来源模块
============

从字典（JSON/YAML 配置文件解析结果）或环境变量读取日志配置，
统一转换为 Option 序列，再交给 build_config / init 使用。

字典键:
    level, filename, maxsize, maxbackups, maxage, localtime, compress
    也接受 Config 的字段名（max_size、local_time 等）

环境变量（默认前缀 XLOG_）:
    XLOG_LEVEL, XLOG_FILENAME, XLOG_MAX_SIZE, XLOG_MAX_BACKUPS,
    XLOG_MAX_AGE, XLOG_LOCAL_TIME, XLOG_COMPRESS

使用示例:
    >>> import xlog
    >>> xlog.init(*options_from_env())
    >>> xlog.init(*options_from_mapping({"filename": "app.log", "maxsize": 10}))
"""

import os
from typing import Any, List, Mapping, Optional

from .errors import ConfigError
from .levels import Level
from .options import (
    Option,
    with_compress,
    with_filename,
    with_level,
    with_local_time,
    with_max_age,
    with_max_backups,
    with_max_size,
    with_string_level,
)

_TRUE_TEXT = {"1", "true", "yes", "on"}
_FALSE_TEXT = {"0", "false", "no", "off"}

# 配置键 -> (Config 字段, 值类型)
_MAPPING_KEYS = {
    "level": ("level", "level"),
    "filename": ("filename", "str"),
    "maxsize": ("max_size", "int"),
    "max_size": ("max_size", "int"),
    "maxbackups": ("max_backups", "int"),
    "max_backups": ("max_backups", "int"),
    "maxage": ("max_age", "int"),
    "max_age": ("max_age", "int"),
    "localtime": ("local_time", "bool"),
    "local_time": ("local_time", "bool"),
    "compress": ("compress", "bool"),
}

_CONSTRUCTORS = {
    "filename": with_filename,
    "max_size": with_max_size,
    "max_backups": with_max_backups,
    "max_age": with_max_age,
    "local_time": with_local_time,
    "compress": with_compress,
}


def _to_int(key, value):
    if isinstance(value, bool):
        raise ConfigError(key, value, "整数")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(key, value, "整数") from None


def _to_bool(key, value):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise ConfigError(key, value, "布尔值")


def _to_option(key, field, kind, value) -> Option:
    if kind == "level":
        if isinstance(value, Level):
            return with_level(value)
        return with_string_level(value)
    if kind == "int":
        value = _to_int(key, value)
    elif kind == "bool":
        value = _to_bool(key, value)
    else:
        value = str(value)
    return _CONSTRUCTORS[field](value)


def options_from_mapping(mapping: Mapping[str, Any]) -> List[Option]:
    """
    从字典生成 Option 序列

    未知的键会被忽略，值为 None 的键不生成 Option。

    Args:
        mapping: 配置字典

    Returns:
        List[Option]: 按字典顺序排列的 Option

    Raises:
        ConfigError: 整数或布尔值无法解析
    """
    options = []
    for key, value in mapping.items():
        spec = _MAPPING_KEYS.get(str(key).lower())
        if spec is None or value is None:
            continue
        field, kind = spec
        options.append(_to_option(key, field, kind, value))
    return options


def options_from_env(prefix: str = "XLOG_", environ: Optional[Mapping[str, str]] = None) -> List[Option]:
    """
    从环境变量生成 Option 序列

    未设置的变量不生成 Option。级别文本会先转为小写，
    因此 XLOG_LEVEL=DEBUG 与 XLOG_LEVEL=debug 等价。

    Args:
        prefix: 环境变量前缀
        environ: 环境变量字典，默认使用 os.environ

    Returns:
        List[Option]: Option 序列

    Raises:
        ConfigError: 整数或布尔值无法解析
    """
    environ = os.environ if environ is None else environ
    options = []
    for field, kind in (
        ("level", "level"),
        ("filename", "str"),
        ("max_size", "int"),
        ("max_backups", "int"),
        ("max_age", "int"),
        ("local_time", "bool"),
        ("compress", "bool"),
    ):
        name = prefix + field.upper()
        if name not in environ:
            continue
        value = environ[name]
        if kind == "level":
            value = value.strip().lower()
        options.append(_to_option(name, field, kind, value))
    return options
