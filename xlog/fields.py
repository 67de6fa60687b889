#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
结构化字段模块
==============

Field 是强类型的键值对，供 Logger 的严格接口（debug/info/... 以及
全局的 *z 系列函数）使用。类型构造方法会在创建时完成类型转换，
写入日志时不再做任何推断。

使用示例:
    >>> Field.integer("attempt", 3)
    Field(key='attempt', value=3)
    >>> Field.error(ValueError("bad"))
    Field(key='error', value='bad')
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable


@dataclass(frozen=True)
class Field:
    """
    日志字段

    Attributes:
        key: 字段名
        value: 已转换好的字段值
    """
    key: str
    value: Any

    @classmethod
    def string(cls, key: str, value) -> "Field":
        return cls(key, str(value))

    @classmethod
    def integer(cls, key: str, value) -> "Field":
        return cls(key, int(value))

    @classmethod
    def number(cls, key: str, value) -> "Field":
        return cls(key, float(value))

    @classmethod
    def boolean(cls, key: str, value) -> "Field":
        return cls(key, bool(value))

    @classmethod
    def duration(cls, key: str, value: timedelta) -> "Field":
        """时长以秒（浮点数）记录"""
        return cls(key, value.total_seconds())

    @classmethod
    def time(cls, key: str, value: datetime) -> "Field":
        """时间以 ISO-8601 字符串记录"""
        return cls(key, value.isoformat())

    @classmethod
    def error(cls, exc: BaseException, key: str = "error") -> "Field":
        return cls(key, str(exc))

    @classmethod
    def any(cls, key: str, value) -> "Field":
        return cls(key, value)


def fields_to_dict(fields: Iterable[Field]) -> Dict[str, Any]:
    """按顺序合并字段，同名字段后者覆盖前者"""
    return {field.key: field.value for field in fields}
