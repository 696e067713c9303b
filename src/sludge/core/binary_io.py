#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
二进制 I/O 封装

提供 BinaryWriter 和 BinaryReader 类，封装所有底层文件操作，
使上层模块不需要直接操作文件指针。

记录头中的整数字段使用宿主机原生的 size_t 宽度与字节序 (struct '@N')，
与原有归档逐位兼容，但不能跨字长不同的机器移植。
"""

import io
import struct
from typing import BinaryIO, Optional

from ..exceptions import TruncatedRecordError

# 原生机器字 (size_t)
WORD_FORMAT = '@N'
WORD_SIZE = struct.calcsize(WORD_FORMAT)


class BinaryWriter:
    """
    二进制写入器

    封装所有底层写操作，提供类型化的写入方法。
    """

    def __init__(self, file: BinaryIO):
        """
        初始化写入器

        Args:
            file: 以 'wb' / 'ab' / 'a+b' 模式打开的文件对象
        """
        self._file = file

    # ==================== 原始写入 ====================

    def write_bytes(self, data: bytes) -> int:
        """
        写入原始字节

        Args:
            data: 要写入的字节

        Returns:
            写入的字节数
        """
        written = self._file.write(data)
        return len(data) if written is None else written

    # ==================== 类型化写入 ====================

    def write_word(self, value: int) -> int:
        """写入原生无符号机器字 (size_t)"""
        return self.write_bytes(struct.pack(WORD_FORMAT, value))


class BinaryReader:
    """
    二进制读取器

    封装所有底层读操作，提供类型化的读取方法。
    读取不足时抛出 TruncatedRecordError，而不是返回短数据。
    """

    def __init__(self, file: BinaryIO):
        """
        初始化读取器

        Args:
            file: 可读、可 seek 的二进制文件对象
        """
        self._file = file

    @property
    def position(self) -> int:
        """当前读取位置"""
        return self._file.tell()

    @property
    def size(self) -> int:
        """流的总长度 (不移动当前位置)"""
        current = self._file.tell()
        end = self._file.seek(0, io.SEEK_END)
        self._file.seek(current)
        return end

    def remaining(self) -> int:
        """从当前位置到流末尾的剩余字节数"""
        return max(self.size - self.position, 0)

    # ==================== 原始读取 ====================

    def read_bytes(self, size: int, field_name: str = 'data') -> bytes:
        """
        读取指定字节数

        Args:
            size: 要读取的字节数
            field_name: 字段名 (用于错误信息)

        Returns:
            读取的字节

        Raises:
            TruncatedRecordError: 流中不足请求的字节数
        """
        offset = self.position
        data = self._file.read(size)
        if len(data) < size:
            raise TruncatedRecordError(field_name, size, len(data), offset)
        return data

    # ==================== 类型化读取 ====================

    def read_word(self, field_name: str = 'word') -> int:
        """读取原生无符号机器字 (size_t)"""
        data = self.read_bytes(WORD_SIZE, field_name)
        return struct.unpack(WORD_FORMAT, data)[0]

    def read_word_or_eof(self, field_name: str = 'word') -> Optional[int]:
        """
        读取机器字，流已结束时返回 None

        一个字节都读不到视为正常结束；读到部分字节视为截断。

        Raises:
            TruncatedRecordError: 只读到机器字的一部分
        """
        offset = self.position
        data = self._file.read(WORD_SIZE)
        if not data:
            return None
        if len(data) < WORD_SIZE:
            raise TruncatedRecordError(field_name, WORD_SIZE, len(data), offset)
        return struct.unpack(WORD_FORMAT, data)[0]

    # ==================== 位置控制 ====================

    def seek(self, position: int) -> None:
        """
        移动到指定位置

        Args:
            position: 目标位置 (绝对偏移)
        """
        self._file.seek(position, io.SEEK_SET)

    def skip(self, size: int, field_name: str = 'payload') -> None:
        """
        跳过指定字节 (seek，不读取)

        Raises:
            TruncatedRecordError: 目标位置超出流末尾
        """
        available = self.remaining()
        if size > available:
            raise TruncatedRecordError(field_name, size, available, self.position)
        self._file.seek(size, io.SEEK_CUR)
