#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 数据结构定义

归档由连续的记录组成，没有魔法数、版本号、索引或校验:

    Archive := Record*
    Record  := name_length(word) name(name_length bytes)
               payload_size(word) payload(payload_size bytes)

word 为宿主机原生 size_t。
"""

import io
from dataclasses import dataclass
from typing import Optional

from .binary_io import BinaryReader, BinaryWriter, WORD_SIZE
from ..exceptions import TruncatedRecordError


# ==================== 记录头 ====================

@dataclass(frozen=True)
class RecordHeader:
    """
    记录头 (2 * WORD_SIZE + name_length bytes)

    每次解析都生成独立的对象，不同迭代之间不共享缓冲区。
    """
    name: bytes = b''
    payload_size: int = 0

    def __post_init__(self):
        if not isinstance(self.name, bytes):
            raise TypeError(f"name 必须为 bytes，实际为 {type(self.name).__name__}")
        if self.payload_size < 0:
            raise ValueError(f"payload_size 不能为负数: {self.payload_size}")

    @property
    def name_length(self) -> int:
        """记录名字节数"""
        return len(self.name)

    @property
    def size(self) -> int:
        """编码后的记录头长度 (不含数据区)"""
        return 2 * WORD_SIZE + self.name_length

    def write_to(self, writer: BinaryWriter) -> int:
        """
        在 writer 的当前位置写入记录头 (不含数据区)

        Returns:
            写入的字节数
        """
        written = writer.write_word(self.name_length)
        written += writer.write_bytes(self.name)
        written += writer.write_word(self.payload_size)
        return written

    def pack(self) -> bytes:
        """序列化为字节 (不含数据区)"""
        buffer = io.BytesIO()
        self.write_to(BinaryWriter(buffer))
        return buffer.getvalue()

    @classmethod
    def unpack(cls, data: bytes) -> 'RecordHeader':
        """
        从字节反序列化

        Raises:
            TruncatedRecordError: data 不足一个完整的记录头
        """
        header = cls.read_from(BinaryReader(io.BytesIO(data)))
        if header is None:
            raise TruncatedRecordError('name_length', WORD_SIZE, 0, 0)
        return header

    @classmethod
    def read_from(cls, reader: BinaryReader) -> Optional['RecordHeader']:
        """
        从流的当前位置解析一个记录头

        成功时游标停在数据区第一个字节。

        Returns:
            RecordHeader，流正好结束时返回 None

        Raises:
            TruncatedRecordError: 任何字段在流末尾被截断，
                或 name_length 超出剩余字节数
        """
        name_length = reader.read_word_or_eof('name_length')
        if name_length is None:
            return None

        # 先校验长度，避免损坏的 name_length 导致超大分配
        available = reader.remaining()
        if name_length > available:
            raise TruncatedRecordError('name', name_length, available, reader.position)

        name = reader.read_bytes(name_length, 'name')
        payload_size = reader.read_word('payload_size')
        return cls(name=name, payload_size=payload_size)
