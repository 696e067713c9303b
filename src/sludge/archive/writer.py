#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Archive 记录写入器

向以追加模式打开的归档流末尾写入一条新记录 (记录头 + 数据区)。
"""

import logging
import os
from typing import BinaryIO, Optional

from ..core.binary_io import BinaryWriter
from ..core.copier import copy_stream
from ..core.schema import RecordHeader
from ..exceptions import IncompleteWriteError, SourceMissingError
from ..utils import encode_name

logger = logging.getLogger(__name__)


def check_source(local_path) -> None:
    """
    检查追加源是否为存在的普通文件

    Raises:
        SourceMissingError: 路径不存在，或不是普通文件 (如目录)
    """
    if not os.path.exists(local_path):
        raise SourceMissingError(os.fsdecode(local_path))
    if not os.path.isfile(local_path):
        raise SourceMissingError(os.fsdecode(local_path), "source is not a regular file")


class ArchiveWriter:
    """
    Archive 记录写入器

    写入没有事务语义: 数据区写入不完整时，
    归档末尾会留下一条声明长度与实际内容不符的记录。
    """

    def __init__(self, stream: BinaryIO, buffer_size: Optional[int] = None):
        """
        Args:
            stream: 以 'ab' / 'a+b' 模式打开的归档流
            buffer_size: 拷贝缓冲区大小，默认取配置值
        """
        self._writer = BinaryWriter(stream)
        self._stream = stream
        self._buffer_size = buffer_size

    def append(self, name, source: BinaryIO, payload_size: int) -> RecordHeader:
        """
        追加一条记录

        Args:
            name: 记录名 (str 或 bytes)
            source: 数据来源流
            payload_size: 数据区字节数

        Returns:
            写入的 RecordHeader

        Raises:
            IncompleteWriteError: 实际拷贝的字节数少于 payload_size
        """
        header = RecordHeader(name=encode_name(name), payload_size=payload_size)
        header.write_to(self._writer)

        written = copy_stream(source, self._stream, payload_size, self._buffer_size)
        if written != payload_size:
            logger.warning(
                "记录 %r 写入不完整: %d / %d 字节，归档末尾已不一致",
                header.name, written, payload_size
            )
            raise IncompleteWriteError(header.name, payload_size, written)

        logger.debug("已追加 %r (%d 字节)", header.name, payload_size)
        return header

    def append_file(self, local_path, name=None) -> RecordHeader:
        """
        追加本地文件

        Args:
            local_path: 本地文件路径
            name: 记录名 (默认使用 local_path 原样)

        Raises:
            SourceMissingError: 本地文件不存在或不是普通文件
            IncompleteWriteError: 文件在拷贝过程中变短
        """
        check_source(local_path)

        if name is None:
            name = local_path

        with open(local_path, 'rb') as f:
            payload_size = os.fstat(f.fileno()).st_size
            return self.append(name, f, payload_size)
