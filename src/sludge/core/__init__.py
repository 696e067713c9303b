#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 核心模块

提供二进制 I/O 封装、记录头定义和流式拷贝。
"""

from .binary_io import BinaryReader, BinaryWriter, WORD_FORMAT, WORD_SIZE
from .schema import RecordHeader
from .copier import copy_stream

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "WORD_FORMAT",
    "WORD_SIZE",
    "RecordHeader",
    "copy_stream",
]
