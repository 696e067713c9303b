#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 命令行入口

    sludge list    ARCHIVE
    sludge append  ARCHIVE FILE...
    sludge extract ARCHIVE [FILE...]

列表与解包提示写到 stdout，错误诊断写到 stderr，失败时退出码为 1。
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from sludge.archive import append_files, extract_all, extract_files, list_archive
from sludge.config import get_settings
from sludge.exceptions import SludgeError
from sludge.utils import display_name

app = typer.Typer(
    help="Sludge archiver: pack files into a flat sequential archive",
    no_args_is_help=True,
)


def _fail(error) -> None:
    """输出单行诊断并以失败状态退出"""
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """在任何子命令执行前配置日志"""
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s - %(message)s"
    )
    # root 已有 handler 时 basicConfig 不生效，包级 logger 单独设置
    logging.getLogger("sludge").setLevel(level)


@app.command("list")
def list_command(
    archive: Path = typer.Argument(..., help="Path to the sludge archive"),
):
    """列出归档中的所有记录"""
    try:
        records = list_archive(archive)
    except (SludgeError, OSError) as e:
        _fail(e)

    for record in records:
        typer.echo(f"{display_name(record.name)} of size {record.payload_size}")


@app.command("append")
def append_command(
    archive: Path = typer.Argument(..., help="Path to the sludge archive"),
    files: Optional[List[str]] = typer.Argument(None, help="Files to add"),
):
    """追加文件到归档 (不存在时创建)"""
    if not files:
        _fail("No files to add")

    try:
        append_files(archive, files)
    except (SludgeError, OSError) as e:
        _fail(e)


@app.command("extract")
def extract_command(
    archive: Path = typer.Argument(..., help="Path to the sludge archive"),
    files: Optional[List[str]] = typer.Argument(None, help="Members to extract (default: all)"),
    output_dir: Path = typer.Option(Path("."), "--output-dir", "-C", help="Directory to extract into"),
):
    """解包指定成员，未指定时解包全部"""
    try:
        if files:
            extract_files(
                archive, files, output_dir,
                on_record=lambda r: typer.echo(f"Extracted {display_name(r.name)}"),
            )
        else:
            extract_all(
                archive, output_dir,
                on_record=lambda r: typer.echo(f"Extracting {display_name(r.name)}"),
            )
    except (SludgeError, OSError) as e:
        _fail(e)


def main():
    app()


if __name__ == "__main__":
    main()
