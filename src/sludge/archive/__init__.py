#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge Archive

提供归档的顺序扫描、追加写入以及 list / append / extract 操作。
"""

from .scanner import ArchiveScanner, ScannerState
from .writer import ArchiveWriter
from .operations import (
    list_archive,
    contains,
    read_member,
    append_files,
    extract_files,
    extract_all,
)

__all__ = [
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
