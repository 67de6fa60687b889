#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志配置模块
============

Config 描述一个 Logger 构建后应有的行为；Option 是只修改 Config
某一个字段的配置值。构建时从默认配置复制出草稿，按顺序应用所有
Option，最后冻结为新的 Config。

默认配置:
    level=INFO, filename="", max_size=100, max_backups=0,
    max_age=0, local_time=True, compress=True

规则:
    - 按传入顺序应用，同一字段后者覆盖前者，不同字段互不影响
    - 不做任何校验，数值原样交给轮转引擎处理
    - 每次构建使用独立的草稿，不与其他构建共享存储

使用示例:
    >>> config = build_config(with_filename("app.log"), with_max_size(50))
    >>> config.filename, config.max_size
    ('app.log', 50)
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List

from .levels import Level, parse_level


@dataclass(frozen=True)
class Config:
    """
    Logger 配置

    Attributes:
        level: 最低输出级别
        filename: 日志文件路径，为空时输出到标准输出
        max_size: 单个日志文件轮转前的最大大小（MB）
        max_backups: 保留的历史文件数量，0 表示不限制
        max_age: 历史文件保留天数，0 表示不限制
        local_time: 历史文件名中的时间戳使用本地时间（False 为 UTC）
        compress: 轮转出的历史文件是否 gzip 压缩
    """
    level: Level = Level.INFO
    filename: str = ""
    max_size: int = 100
    max_backups: int = 0
    max_age: int = 0
    local_time: bool = True
    compress: bool = True

    def to_options(self) -> List["Option"]:
        """返回能够重建该配置的 Option 序列"""
        return [Option(f.name, getattr(self, f.name)) for f in fields(self)]


DEFAULT_CONFIG = Config()

_FIELD_NAMES = frozenset(f.name for f in fields(Config))


@dataclass(frozen=True)
class Option:
    """
    单字段配置值

    Attributes:
        field: 要修改的 Config 字段名
        value: 新的字段值
    """
    field: str
    value: Any

    def __post_init__(self):
        if self.field not in _FIELD_NAMES:
            raise AttributeError(f"Config 没有字段: {self.field}")

    def apply(self, draft: Dict[str, Any]) -> None:
        """把值写入草稿"""
        draft[self.field] = self.value


def with_level(level: Level) -> Option:
    """
    设置级别

    文本按 with_string_level 的规则解析，数值转换为 Level，
    不在六个级别之内的数值抛出 ValueError。
    """
    if isinstance(level, str):
        return Option("level", parse_level(level))
    return Option("level", Level(level))


def with_string_level(level: str) -> Option:
    """
    使用文本设置级别

    无法识别的文本（包括空字符串）回落到 INFO。
    """
    return Option("level", parse_level(level))


def with_filename(filename: str) -> Option:
    return Option("filename", filename)


def with_max_size(max_size: int) -> Option:
    return Option("max_size", max_size)


def with_max_backups(max_backups: int) -> Option:
    return Option("max_backups", max_backups)


def with_max_age(max_age: int) -> Option:
    return Option("max_age", max_age)


def with_local_time(local_time: bool) -> Option:
    return Option("local_time", local_time)


def with_compress(compress: bool) -> Option:
    return Option("compress", compress)


def build_config(*options: Option) -> Config:
    """
    从默认配置出发应用 Option，生成最终配置

    Args:
        *options: 按顺序应用的配置值

    Returns:
        Config: 新的配置对象
    """
    draft = asdict(DEFAULT_CONFIG)
    for option in options:
        option.apply(draft)
    return Config(**draft)
