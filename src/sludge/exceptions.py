#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 异常定义

所有异常均继承自 SludgeError，便于统一捕获。
底层文件系统错误 (open/read/write/seek) 直接以 OSError 向上传播。
"""

from typing import Optional

from .utils import display_name as _display


class SludgeError(Exception):
    """sludge 基础异常"""
    pass


class DecodeError(SludgeError):
    """记录头解析失败"""
    pass


class TruncatedRecordError(DecodeError):
    """
    记录被截断异常

    当记录头字段或数据区在声明长度之前遇到流末尾时抛出，
    通常意味着归档文件不完整或 payload_size 已损坏。
    """
    def __init__(self, field_name: str, expected: int, actual: int,
                 offset: Optional[int] = None):
        self.field_name = field_name
        self.expected = expected
        self.actual = actual
        self.offset = offset
        message = (
            f"记录被截断: 字段 '{field_name}' 期望 {expected} 字节，"
            f"实际只有 {actual} 字节"
        )
        if offset is not None:
            message += f" (偏移 {offset})"
        super().__init__(message)


class RecordNotFoundError(SludgeError, LookupError):
    """
    记录不存在异常

    当请求的成员名在归档中不存在时抛出。
    """
    def __init__(self, name: bytes):
        self.name = name
        super().__init__(f"{_display(name)} not found in archive")


class DuplicateNameError(SludgeError):
    """
    重复成员名异常

    追加的文件名已存在于归档中时抛出。归档保持不变。
    """
    def __init__(self, name: bytes):
        self.name = name
        super().__init__(f"{_display(name)} is already archived")


class SourceMissingError(SludgeError, FileNotFoundError):
    """追加的源文件不存在或不是普通文件"""
    def __init__(self, path: str, reason: str = "source file does not exist"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class UnsafeNameError(SludgeError):
    """
    不安全的记录名异常

    记录名 (如 ../x 或绝对路径) 解析后位于输出目录之外时抛出，
    不会为该记录创建任何文件。
    """
    def __init__(self, name: bytes, output_dir: str):
        self.name = name
        self.output_dir = output_dir
        super().__init__(
            f"{_display(name)} would be extracted outside {output_dir}"
        )


class IncompleteWriteError(SludgeError):
    """
    数据写入不完整异常

    拷贝器写入的字节数少于记录头声明的 payload_size。
    此时归档末尾留下一条不一致的记录，不做回滚。
    """
    def __init__(self, name: bytes, expected: int, written: int):
        self.name = name
        self.expected = expected
        self.written = written
        super().__init__(
            f"Appending {_display(name)} failed: "
            f"wrote {written} of {expected} bytes"
        )


class ScannerStateError(SludgeError):
    """扫描器已处于错误状态，不能继续使用"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "扫描器已出错，需要重新打开归档")
