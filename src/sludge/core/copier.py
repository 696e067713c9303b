#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
流式字节拷贝

在两个二进制流之间搬运固定数量的字节，使用有界缓冲区，
不会把整个数据区读入内存。
"""

from typing import BinaryIO, Optional

from ..config import default_buffer_size


def copy_stream(
    source: BinaryIO,
    destination: BinaryIO,
    size: int,
    buffer_size: Optional[int] = None
) -> int:
    """
    从 source 拷贝 size 字节到 destination

    源流提前结束 (短读) 或写入不完整时提前返回已写入的字节数。
    截断不在此处抛出异常，调用方需自行比较返回值与 size。

    Args:
        source: 源流
        destination: 目标流
        size: 要拷贝的字节数
        buffer_size: 单次读取上限，默认取配置值

    Returns:
        实际写入的字节数

    Raises:
        ValueError: buffer_size 非正数
        OSError: 底层读写失败
    """
    if buffer_size is None:
        buffer_size = default_buffer_size()
    if buffer_size <= 0:
        raise ValueError(f"buffer_size 必须为正数: {buffer_size}")

    written = 0
    while written < size:
        chunk = source.read(min(size - written, buffer_size))
        if not chunk:
            break

        count = destination.write(chunk)
        if count is None:
            count = len(chunk)
        written += count

        if count < len(chunk):
            break

    return written
