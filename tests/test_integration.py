#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
集成测试

完整的 append → list → extract 链路，以及对 src 目录本身的打包。
"""

import os
import random

import pytest

from sludge import append_files, extract_all, list_archive, read_member

from conftest import SRC_DIR


# ==================== 往返测试 ====================

class TestRoundTrip:
    """追加后全部解包，内容与文件名逐字节一致"""

    def test_random_files(self, workdir, out_dir):
        rng = random.Random(1234)
        files = {}
        for i in range(20):
            size = rng.choice([0, 1, 1023, 1024, 1025, rng.randint(0, 5000)])
            files[f"file_{i:02d}.bin"] = bytes(rng.getrandbits(8) for _ in range(size))

        for name, content in files.items():
            (workdir / name).write_bytes(content)

        archive = workdir / "random.sludge"
        append_files(archive, list(files))
        extract_all(archive, out_dir)

        assert sorted(p.name for p in out_dir.iterdir()) == sorted(files)
        for name, content in files.items():
            assert (out_dir / name).read_bytes() == content

    def test_incremental_appends(self, workdir, out_dir):
        """多次追加等价于一次追加"""
        archive = workdir / "inc.sludge"
        expected = []
        for i in range(5):
            name = f"part{i}.txt"
            content = f"part {i}\n".encode() * i
            (workdir / name).write_bytes(content)
            append_files(archive, [name])
            expected.append((name.encode(), len(content)))

        records = list_archive(archive)
        assert [(r.name, r.payload_size) for r in records] == expected

    def test_archive_size_is_sum_of_records(self, archive_file):
        archive, _ = archive_file
        records = list_archive(archive)
        total = sum(r.size + r.payload_size for r in records)
        assert archive.stat().st_size == total


# ==================== 打包源码目录 ====================

@pytest.mark.slow
class TestPackSourceTree:
    """把 src/sludge 下的源文件打包后逐个读回"""

    @pytest.fixture
    def source_files(self, workdir):
        package_dir = SRC_DIR / "sludge"
        assert package_dir.exists(), f"src 目录不存在: {package_dir}"

        names = []
        for root, _, filenames in os.walk(package_dir):
            for filename in sorted(filenames):
                if filename.endswith(".py"):
                    names.append(os.path.join(root, filename))
        return names

    def test_pack_and_read_back(self, source_files, workdir):
        archive = workdir / "src.sludge"
        append_files(archive, source_files)

        assert len(list_archive(archive)) == len(source_files)
        for path in source_files:
            with open(path, 'rb') as f:
                assert read_member(archive, path) == f.read()
