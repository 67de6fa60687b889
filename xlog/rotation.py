#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
文件轮转适配模块
================

把 Config 中的轮转参数翻译成 loguru 文件输出的参数。轮转本身
（按大小切分、清理、压缩的时机）完全由 loguru 负责。

参数对应关系:
    max_size    -> rotation     单文件大小上限（MB 换算为字节）
    max_backups -> retention    保留的历史文件数量
    max_age     -> retention    历史文件保留天数
    local_time  -> compression  历史文件名中的时间戳时区
    compress    -> compression  历史文件是否 gzip 压缩

local_time 为 True 时直接使用 loguru 自带的 "gz" 压缩；为 False 时
loguru 没有改写时间戳的入口，由 BackupArchiver 先改名再按需压缩。

容错规则:
    - max_size 不大于 0 时使用默认的 100MB
    - max_backups / max_age 不大于 0 时视为不限制
"""

import gzip
import os
import shutil
import time
from datetime import datetime, timedelta, timezone

MEGABYTE = 1024 * 1024
DEFAULT_MAX_SIZE = 100

# 与 loguru 历史文件名中的时间戳格式保持一致，保证清理时仍能匹配
BACKUP_TIME_FORMAT = "%Y-%m-%d_%H-%M-%S_%f"
_STAMP_LENGTH = len("2000-01-01_00-00-00_000000")


class RetentionPolicy:
    """
    同时按数量和天数清理历史文件

    loguru 在每次轮转后调用本对象，传入所有匹配的历史文件。
    按修改时间从新到旧排序，超出数量或超过天数的文件都会被删除。

    Attributes:
        max_backups: 保留的文件数量
        max_age: 保留天数
    """

    def __init__(self, max_backups, max_age):
        self.max_backups = max_backups
        self.max_age = max_age

    def __call__(self, files):
        cutoff = time.time() - self.max_age * 86400
        ordered = sorted(files, key=os.path.getmtime, reverse=True)
        for index, path in enumerate(ordered):
            if index >= self.max_backups or os.path.getmtime(path) < cutoff:
                os.remove(path)


class BackupArchiver:
    """
    处理轮转出的历史文件

    loguru 重命名历史文件时使用文件创建时刻的本地时间；local_time 为 False
    时把同一时刻换算为 UTC 重新命名。compress 为 True 时再压缩为 .gz
    并删除原文件。
    正在写入的日志文件不会被处理。

    Attributes:
        filename: 正在写入的日志文件路径
        local_time: 是否保留本地时间戳
        compress: 是否压缩
    """

    def __init__(self, filename, local_time, compress):
        self.filename = filename
        self.local_time = local_time
        self.compress = compress

    def __call__(self, path):
        if os.path.abspath(path) == os.path.abspath(self.filename):
            return
        if not self.local_time:
            path = self.restamp(path)
        if self.compress:
            self.compress_file(path)

    def restamp(self, path):
        """
        把 loguru 写入文件名的本地时间戳换算为 UTC

        文件名形如 app.<时间戳>[.<序号>].log，时间戳无法识别时保持原名。

        Returns:
            str: 重命名后的路径
        """
        root, _ = os.path.splitext(os.path.abspath(self.filename))
        prefix = root + "."
        path = os.path.abspath(path)
        if not path.startswith(prefix):
            return path
        name = path[len(prefix):]
        stamp, rest = name[:_STAMP_LENGTH], name[_STAMP_LENGTH:]
        try:
            created = datetime.strptime(stamp, BACKUP_TIME_FORMAT)
        except ValueError:
            return path
        utc = created.astimezone().astimezone(timezone.utc)
        target = prefix + utc.strftime(BACKUP_TIME_FORMAT) + rest
        if target != path:
            os.rename(path, target)
        return target

    @staticmethod
    def compress_file(path):
        """压缩为 path.gz 并删除原文件"""
        with open(path, "rb") as src, gzip.open(path + ".gz", "wb") as dst:
            shutil.copyfileobj(src, dst)
        os.remove(path)
        return path + ".gz"


def build_retention(max_backups, max_age):
    """
    根据数量和天数限制生成 loguru 的 retention 参数

    Returns:
        None / int / timedelta / RetentionPolicy
    """
    limit_count = max_backups > 0
    limit_age = max_age > 0
    if limit_count and limit_age:
        return RetentionPolicy(max_backups, max_age)
    if limit_count:
        return max_backups
    if limit_age:
        return timedelta(days=max_age)
    return None


def file_sink_options(config):
    """
    生成 loguru 文件输出的关键字参数

    Args:
        config: Config 对象，filename 必须非空

    Returns:
        dict: 可直接传给 logger.add 的参数
    """
    max_size = config.max_size if config.max_size > 0 else DEFAULT_MAX_SIZE
    options = {
        "rotation": max_size * MEGABYTE,
        "retention": build_retention(config.max_backups, config.max_age),
        "encoding": "utf-8",
    }
    if not config.local_time:
        options["compression"] = BackupArchiver(
            config.filename, config.local_time, config.compress
        )
    elif config.compress:
        options["compression"] = "gz"
    return options
