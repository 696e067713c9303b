#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Archive 顺序扫描器

归档没有索引，枚举与查找都只能从某个位置开始顺序扫描:
解析记录头，然后 seek 跳过数据区，直到流结束。
"""

import logging
from enum import Enum
from typing import BinaryIO, Iterator, Optional, Tuple

from ..core.binary_io import BinaryReader
from ..core.copier import copy_stream
from ..core.schema import RecordHeader
from ..exceptions import ScannerStateError, SludgeError, TruncatedRecordError
from ..utils import encode_name

logger = logging.getLogger(__name__)


class ScannerState(Enum):
    """扫描器状态"""
    AT_HEADER = "at_header"     # 游标位于记录头
    AT_PAYLOAD = "at_payload"   # 游标位于数据区起点
    AT_END = "at_end"           # 流已结束
    ERRORED = "errored"         # 解析/seek/拷贝失败 (终止状态)


class ArchiveScanner:
    """
    Archive 顺序扫描器

    包装一个可读、可 seek 的二进制流，从当前位置开始逐条读取记录。
    任何失败都会使扫描器进入 ERRORED 状态，之后的调用抛出 ScannerStateError。
    """

    def __init__(self, stream: BinaryIO, buffer_size: Optional[int] = None):
        """
        Args:
            stream: 归档流 (至少可读、可 seek)
            buffer_size: copy_payload 使用的拷贝缓冲区大小
        """
        self._stream = stream
        self._reader = BinaryReader(stream)
        self._buffer_size = buffer_size
        self._state = ScannerState.AT_HEADER
        self._current: Optional[RecordHeader] = None

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def position(self) -> int:
        return self._reader.position

    def rewind(self) -> None:
        """回到流的开头重新扫描"""
        self._ensure_usable()
        self._reader.seek(0)
        self._current = None
        self._state = ScannerState.AT_HEADER

    # ==================== 单步操作 ====================

    def next_record(self) -> Optional[RecordHeader]:
        """
        解析下一条记录头

        Returns:
            RecordHeader (游标停在其数据区起点)，流结束时返回 None

        Raises:
            TruncatedRecordError: 记录头被截断
        """
        self._expect(ScannerState.AT_HEADER, ScannerState.AT_END)
        if self._state is ScannerState.AT_END:
            return None

        try:
            record = RecordHeader.read_from(self._reader)
        except (SludgeError, OSError):
            self._state = ScannerState.ERRORED
            raise

        if record is None:
            self._state = ScannerState.AT_END
            self._current = None
            return None

        self._state = ScannerState.AT_PAYLOAD
        self._current = record
        return record

    def skip_payload(self, record: Optional[RecordHeader] = None) -> None:
        """
        seek 跳过当前记录的数据区

        Raises:
            TruncatedRecordError: payload_size 超出流末尾
        """
        self._expect(ScannerState.AT_PAYLOAD)
        if record is None:
            record = self._current
        try:
            self._reader.skip(record.payload_size)
        except (SludgeError, OSError):
            self._state = ScannerState.ERRORED
            raise
        self._state = ScannerState.AT_HEADER

    def copy_payload(self, destination: BinaryIO,
                     record: Optional[RecordHeader] = None) -> int:
        """
        把当前记录的数据区拷贝到 destination

        Returns:
            写入的字节数 (恒等于 payload_size)

        Raises:
            TruncatedRecordError: 数据区不足 payload_size 字节
        """
        self._expect(ScannerState.AT_PAYLOAD)
        if record is None:
            record = self._current
        offset = self._reader.position
        try:
            written = copy_stream(
                self._stream, destination, record.payload_size, self._buffer_size
            )
        except (SludgeError, OSError):
            self._state = ScannerState.ERRORED
            raise
        if written != record.payload_size:
            self._state = ScannerState.ERRORED
            raise TruncatedRecordError('payload', record.payload_size, written, offset)
        self._state = ScannerState.AT_HEADER
        return written

    # ==================== 组合操作 ====================

    def find_record(self, name) -> Optional[Tuple[RecordHeader, int]]:
        """
        从当前位置查找指定名称的第一条记录

        逐字节比较记录名，线性扫描。

        Args:
            name: 记录名 (str 或 bytes)

        Returns:
            (record, payload_offset)，未找到时返回 None。
            找到时游标停在该记录的数据区起点。
        """
        target = encode_name(name)
        while True:
            record = self.next_record()
            if record is None:
                return None
            if record.name == target:
                logger.debug("找到记录 %r (数据区偏移 %d)", record.name, self._reader.position)
                return record, self._reader.position
            self.skip_payload(record)

    def iter_records(self) -> Iterator[RecordHeader]:
        """
        迭代从当前位置到末尾的所有记录头 (生成器模式，不读取数据区)

        Yields:
            RecordHeader
        """
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record
            # 调用方可能已在 yield 期间拷贝了数据区
            if self._state is ScannerState.AT_PAYLOAD:
                self.skip_payload(record)

    def __iter__(self) -> Iterator[RecordHeader]:
        return self.iter_records()

    # ==================== 内部 ====================

    def _ensure_usable(self) -> None:
        if self._state is ScannerState.ERRORED:
            raise ScannerStateError()

    def _expect(self, *states: ScannerState) -> None:
        self._ensure_usable()
        if self._state not in states:
            expected = ", ".join(s.name for s in states)
            raise ScannerStateError(
                f"扫描器状态错误: 期望 {expected}, 实际 {self._state.name}"
            )
