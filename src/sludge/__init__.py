#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge - 极简顺序归档容器

把一组文件打包进一个平坦的二进制文件，之后可以列出、解包或继续追加。
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    SludgeError,
    DecodeError,
    TruncatedRecordError,
    RecordNotFoundError,
    DuplicateNameError,
    SourceMissingError,
    IncompleteWriteError,
    ScannerStateError,
    UnsafeNameError,
)

# 核心
from .core import RecordHeader, copy_stream

# Archive
from .archive import (
    ArchiveScanner,
    ScannerState,
    ArchiveWriter,
    list_archive,
    contains,
    read_member,
    append_files,
    extract_files,
    extract_all,
)

__all__ = [
    # 版本
    "__version__",
    # 异常
    "SludgeError",
    "DecodeError",
    "TruncatedRecordError",
    "RecordNotFoundError",
    "DuplicateNameError",
    "SourceMissingError",
    "IncompleteWriteError",
    "ScannerStateError",
    "UnsafeNameError",
    # 核心
    "RecordHeader",
    "copy_stream",
    # Archive
    "ArchiveScanner",
    "ScannerState",
    "ArchiveWriter",
    "list_archive",
    "contains",
    "read_member",
    "append_files",
    "extract_files",
    "extract_all",
]
