#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Archive 操作

把扫描器、写入器和拷贝器组合成面向用户的操作:
list / append / extract (指定成员或全部)。

每个操作独占打开归档，无论成功或失败都会关闭。
批量操作遇到第一个错误即中止，之前完成的部分不回滚。
"""

import io
import logging
import os
from typing import Callable, Iterable, List, Optional

from ..core.schema import RecordHeader
from ..exceptions import (
    DuplicateNameError,
    RecordNotFoundError,
    UnsafeNameError,
)
from ..utils import PathLike, encode_name, is_within, output_path
from .scanner import ArchiveScanner
from .writer import ArchiveWriter, check_source

logger = logging.getLogger(__name__)

RecordCallback = Callable[[RecordHeader], None]


def _target_path(output_dir: PathLike, name: bytes) -> bytes:
    """
    计算解包目标路径，拒绝解析到输出目录之外的记录名

    Raises:
        UnsafeNameError: 记录名含 .. 或为绝对路径并逃出 output_dir
    """
    target = output_path(output_dir, name)
    if not is_within(output_dir, target):
        logger.warning("拒绝解包到输出目录之外: %r", name)
        raise UnsafeNameError(name, os.fsdecode(output_dir))
    return target


# ==================== 读取 ====================

def list_archive(archive_path: PathLike) -> List[RecordHeader]:
    """
    列出归档中的所有记录 (按写入顺序)

    Returns:
        RecordHeader 列表，不含数据区

    Raises:
        TruncatedRecordError: 归档损坏或不完整
        OSError: 归档无法打开
    """
    with open(archive_path, 'rb') as f:
        return list(ArchiveScanner(f).iter_records())


def contains(archive_path: PathLike, name) -> bool:
    """检查归档中是否存在指定名称的记录"""
    with open(archive_path, 'rb') as f:
        return ArchiveScanner(f).find_record(name) is not None


def read_member(archive_path: PathLike, name,
                buffer_size: Optional[int] = None) -> bytes:
    """
    读取指定成员的完整内容

    Raises:
        RecordNotFoundError: 成员不存在
        TruncatedRecordError: 数据区不完整
    """
    with open(archive_path, 'rb') as f:
        scanner = ArchiveScanner(f, buffer_size)
        found = scanner.find_record(name)
        if found is None:
            raise RecordNotFoundError(encode_name(name))
        buffer = io.BytesIO()
        scanner.copy_payload(buffer, found[0])
        return buffer.getvalue()


# ==================== 追加 ====================

def append_files(
    archive_path: PathLike,
    names: Iterable,
    on_record: Optional[RecordCallback] = None,
    buffer_size: Optional[int] = None
) -> List[RecordHeader]:
    """
    将文件依次追加到归档 (归档不存在时创建)

    对每个文件: 先检查源文件存在，再扫描整个已写入的归档拒绝重名，
    最后追加。第一个失败即停止，之后的文件不再处理。

    Args:
        archive_path: 归档路径
        names: 要追加的文件路径，路径原样作为记录名
        on_record: 每追加成功一条记录后的回调
        buffer_size: 拷贝缓冲区大小

    Returns:
        追加成功的 RecordHeader 列表

    Raises:
        ValueError: 没有给出任何文件
        SourceMissingError: 源文件不存在或不是普通文件
        DuplicateNameError: 记录名已在归档中
        IncompleteWriteError: 数据区写入不完整
    """
    names = list(names)
    if not names:
        raise ValueError("No files to add")

    appended = []
    with open(archive_path, 'a+b') as f:
        scanner = ArchiveScanner(f, buffer_size)
        writer = ArchiveWriter(f, buffer_size)

        for name in names:
            check_source(name)

            scanner.rewind()
            if scanner.find_record(name) is not None:
                logger.warning("重复的记录名: %s", os.fsdecode(name))
                raise DuplicateNameError(encode_name(name))

            record = writer.append_file(name)
            appended.append(record)
            if on_record:
                on_record(record)

    logger.debug("共追加 %d 个文件到 %s", len(appended), os.fsdecode(archive_path))
    return appended


# ==================== 解包 ====================

def extract_files(
    archive_path: PathLike,
    names: Iterable,
    output_dir: PathLike = ".",
    on_record: Optional[RecordCallback] = None,
    buffer_size: Optional[int] = None
) -> List[RecordHeader]:
    """
    解包指定成员

    每个成员都从归档开头查找。输出文件以记录名命名，
    已存在的同名文件会被直接覆盖。第一个失败即中止。

    Raises:
        RecordNotFoundError: 成员不存在 (不会为其创建任何文件)
        UnsafeNameError: 记录名解析到 output_dir 之外 (不会为其创建任何文件)
        TruncatedRecordError: 数据区不完整
        OSError: 输出文件无法创建
    """
    extracted = []
    with open(archive_path, 'rb') as f:
        scanner = ArchiveScanner(f, buffer_size)

        for name in names:
            scanner.rewind()
            found = scanner.find_record(name)
            if found is None:
                logger.warning("成员不存在: %s", os.fsdecode(name))
                raise RecordNotFoundError(encode_name(name))

            record, payload_offset = found
            with open(_target_path(output_dir, record.name), 'wb') as out:
                f.seek(payload_offset)
                scanner.copy_payload(out, record)

            extracted.append(record)
            if on_record:
                on_record(record)

    return extracted


def extract_all(
    archive_path: PathLike,
    output_dir: PathLike = ".",
    on_record: Optional[RecordCallback] = None,
    buffer_size: Optional[int] = None
) -> List[RecordHeader]:
    """
    解包所有记录

    按归档顺序逐条写出，不检查重名: 后出现的同名记录会覆盖先写出的文件。

    Args:
        archive_path: 归档路径
        output_dir: 输出目录
        on_record: 每条记录开始解包前的回调
        buffer_size: 拷贝缓冲区大小

    Returns:
        已解包的 RecordHeader 列表

    Raises:
        UnsafeNameError: 记录名解析到 output_dir 之外，之后的记录不再解包
        TruncatedRecordError: 归档损坏或数据区不完整
    """
    extracted = []
    with open(archive_path, 'rb') as f:
        scanner = ArchiveScanner(f, buffer_size)

        for record in scanner.iter_records():
            if on_record:
                on_record(record)
            with open(_target_path(output_dir, record.name), 'wb') as out:
                scanner.copy_payload(out, record)
            extracted.append(record)

    logger.debug("共解包 %d 个文件", len(extracted))
    return extracted
