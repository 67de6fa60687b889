#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志编码模块
============

固定的控制台风格编码，不可配置。每条记录占一行，字段之间以制表符分隔:

    时间(ISO-8601) | 级别 | 模块:函数:行号 | 消息 | 结构化字段(JSON)

示例:
    2024-05-01T12:30:00.123+0800	INFO	app.main:run:42	服务启动	{"port": 8080}

没有结构化字段时省略最后一列。用户字段整体存放在 extra 的一个内部键下，
与路由等内部键互不冲突，任何用户键名都会原样输出。
"""

import json

# 内部 extra 键的前缀
INTERNAL_PREFIX = "_xlog_"
# 用户字段（dict）
FIELDS_KEY = INTERNAL_PREFIX + "fields"
# 编码后的 JSON 文本，仅供格式模板引用
ENCODED_KEY = INTERNAL_PREFIX + "json"

LINE_FORMAT = (
    "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ}\t{level}\t"
    "{name}:{function}:{line}\t{message}"
)


def encode_fields(fields):
    """把用户字段编码为 JSON，没有字段时返回 None"""
    if not fields:
        return None
    return json.dumps(fields, default=str, ensure_ascii=False)


def console_format(record):
    """
    loguru 的格式化函数

    loguru 会用记录本身再次格式化返回的模板，因此 JSON 文本
    先放进 extra，模板里只引用它的键。

    Args:
        record: loguru 日志记录

    Returns:
        str: 该记录使用的格式模板
    """
    encoded = encode_fields(record["extra"].get(FIELDS_KEY))
    if encoded is None:
        return LINE_FORMAT + "\n{exception}"
    record["extra"][ENCODED_KEY] = encoded
    return LINE_FORMAT + "\t{extra[" + ENCODED_KEY + "]}\n{exception}"
