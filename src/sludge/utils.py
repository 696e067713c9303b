#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 工具函数

提供成员名编码、输出路径拼接等通用功能。
"""

import os
from typing import Union

PathLike = Union[str, bytes, os.PathLike]


def encode_name(name: PathLike) -> bytes:
    """
    将成员名转换为归档中存储的原始字节

    str 按文件系统编码转换 (与 open() 一致)，bytes 原样返回。
    不做任何规范化: 追加时给出的路径即为记录名。

    Examples:
        >>> encode_name("x.txt")
        b'x.txt'
        >>> encode_name(b"x.txt")
        b'x.txt'
    """
    return os.fsencode(name)


def display_name(name: PathLike) -> str:
    """
    成员名的可读形式

    无法解码的字节通过 surrogateescape 保留，
    因此 encode_name(display_name(x)) == x。
    """
    return os.fsdecode(name)


def output_path(output_dir: PathLike, name: bytes) -> bytes:
    """
    计算解包目标路径

    Args:
        output_dir: 输出目录
        name: 记录名 (原始字节)

    Returns:
        目标文件路径 (bytes)，output_dir 为 "." 时即为记录名本身
    """
    directory = os.fsencode(output_dir)
    if directory in (b"", b"."):
        return name
    return os.path.join(directory, name)


def is_within(output_dir: PathLike, target: PathLike) -> bool:
    """
    target 解析 (含符号链接) 后是否仍位于 output_dir 之内

    Examples:
        >>> is_within(".", b"x.txt")
        True
        >>> is_within("out", b"out/../x.txt")
        False
    """
    base = os.path.realpath(os.fsencode(output_dir) or b".")
    resolved = os.path.realpath(os.fsencode(target))
    return os.path.commonpath([base, resolved]) == base
