#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures 和测试工具。
"""

import io
import struct
from pathlib import Path
from typing import Dict

import pytest


# ==================== 路径常量 ====================

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# src 目录 (用于集成测试)
SRC_DIR = PROJECT_ROOT / "src"


# ==================== 自定义 Markers ====================

def pytest_configure(config):
    """注册自定义 markers"""
    config.addinivalue_line("markers", "slow: 耗时较长的测试")


# ==================== 测试工具 ====================

def raw_record(name: bytes, payload: bytes, payload_size: int = None) -> bytes:
    """
    按原生 size_t 布局手工拼出一条记录 (不经过 RecordHeader)

    payload_size 可与实际 payload 长度不同，用于构造损坏的归档。
    """
    if payload_size is None:
        payload_size = len(payload)
    return (
        struct.pack('@N', len(name)) + name
        + struct.pack('@N', payload_size) + payload
    )


# ==================== 基础 Fixtures ====================

@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """
    切换到空的工作目录

    记录名就是追加时给出的路径，测试统一使用相对路径。
    """
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def out_dir(tmp_path):
    """空的解包输出目录"""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def sample_files(workdir) -> Dict[str, bytes]:
    """
    在工作目录中创建测试文件集

    Returns:
        {文件名: 内容} 字典
    """
    files = {
        "hero.txt": b"Hero data content",
        "config.json": b'{"name": "test", "value": 123}',
        "data.bin": b"\x00\x01\x02\x03\x04\x05\x06\x07",
        "empty.dat": b"",
        "中文文件.txt": "这是中文内容测试".encode("utf-8"),
    }

    for name, content in files.items():
        (workdir / name).write_bytes(content)

    return files


@pytest.fixture
def large_file(workdir) -> bytes:
    """大于拷贝缓冲区的文件 (用于分块拷贝测试)"""
    content = bytes(range(256)) * 40 + b"tail"
    (workdir / "large.bin").write_bytes(content)
    return content


@pytest.fixture
def archive_file(workdir, sample_files):
    """
    创建一个包含 sample_files 的归档

    Returns:
        (归档路径, 文件内容字典)
    """
    from sludge import append_files

    archive_path = workdir / "test.sludge"
    append_files(archive_path, list(sample_files))
    return archive_path, sample_files


@pytest.fixture
def memory_archive() -> io.BytesIO:
    """内存中的三条记录归档"""
    data = (
        raw_record(b"a.txt", b"alpha")
        + raw_record(b"b.txt", b"")
        + raw_record(b"c.txt", b"gamma!")
    )
    return io.BytesIO(data)
