#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
测试公共配置
============

1. 把项目根目录加入模块搜索路径，保证未安装时也能导入 xlog
2. 提供创建 Logger 的夹具，测试结束后自动移除 loguru 处理器
3. 提供保存、恢复全局默认 Logger 的夹具
"""

import os
import sys

import pytest

_ROOT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT_PATH not in sys.path:
    sys.path.insert(0, _ROOT_PATH)

from xlog import facade  # noqa: E402
from xlog.logger import build  # noqa: E402


@pytest.fixture
def make_logger():
    """
    按 Option 构建 Logger，测试结束后关闭

    Returns:
        Callable[..., Logger]
    """
    created = []

    def factory(*options):
        log = build(*options)
        created.append(log)
        return log

    yield factory

    for log in created:
        log.close()


@pytest.fixture
def restore_default():
    """测试期间可随意调用 init()，结束后恢复原来的默认 Logger"""
    saved = facade._defaults
    yield
    current = facade._defaults
    facade._defaults = saved
    if current is not saved:
        current[0].close()


@pytest.fixture
def fake_exit(monkeypatch):
    """
    替换 os._exit，FATAL 日志不再结束测试进程

    Returns:
        list: 每次调用时传入的退出码
    """
    codes = []

    def _exit(code):
        codes.append(code)
        raise SystemExit(code)

    monkeypatch.setattr(os, "_exit", _exit)
    return codes
