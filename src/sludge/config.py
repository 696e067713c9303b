#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sludge 配置

通过环境变量 (前缀 SLUDGE_) 或 .env 文件覆盖默认值:

    SLUDGE_BUFFER_SIZE=65536
    SLUDGE_LOG_LEVEL=DEBUG
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 拷贝缓冲区默认大小 (与格式无关，仅影响 I/O 粒度)
DEFAULT_BUFFER_SIZE = 1024


class SludgeSettings(BaseSettings):
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    log_level: str = Field(default="WARNING")

    model_config = SettingsConfigDict(
        env_prefix="SLUDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> SludgeSettings:
    """进程级配置单例"""
    return SludgeSettings()


def default_buffer_size() -> int:
    """当前配置的拷贝缓冲区大小"""
    return get_settings().buffer_size
