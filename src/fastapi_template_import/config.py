"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: config.py
@DateTime: 2026-03-02
@Docs: Import engine configuration helpers.
导入引擎配置助手。

This module defines the limits and switches used by an import run.
本模块定义导入运行所使用的限制与开关。

It can be configured via environment variables or function parameters.
支持通过环境变量或函数参数进行配置。

Environment variables / 环境变量:
        - TEMPLATE_IMPORT_MAX_COMBINATIONS:
            Ceiling for matrix expansion (default: 10000).
            矩阵展开组合数上限（默认 10000）。
        - TEMPLATE_IMPORT_MAX_UPLOAD_MB:
            Max upload size in MB (default: 20).
            最大上传大小（MB，默认 20）。
        - TEMPLATE_IMPORT_ALLOWED_EXTENSIONS:
            Comma-separated allowed extensions.
            允许的扩展名列表（逗号分隔）。
        - TEMPLATE_IMPORT_REJECT_EXISTING_CODES:
            Reject simple rows whose code already exists (true/false).
            简单导入时拒绝已存在的商品编码（true/false）。
        - TEMPLATE_IMPORT_SKU_SEPARATOR:
            Separator between parent code and index in generated SKUs (default: "-").
            生成 SKU 时父编码与序号之间的分隔符（默认 "-"）。

Examples:
        >>> from fastapi_template_import.config import resolve_config
        >>> cfg = resolve_config()
        >>> cfg.max_combinations
        10000

        >>> cfg = resolve_config(max_combinations=50)
        >>> cfg.max_combinations
        50
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_ALLOWED_EXTENSIONS = (".csv", ".xlsx", ".xlsm", ".xls")
DEFAULT_MAX_COMBINATIONS = 10_000
DEFAULT_MAX_UPLOAD_MB = 20

_TRUTHY = {"1", "true", "yes", "on", "y"}
_FALSY = {"0", "false", "no", "off", "n"}


@dataclass(frozen=True, slots=True)
class ImportEngineConfig:
    """Import engine configuration.

    导入引擎配置。

    Attributes:
        max_combinations: Ceiling for generated combinations per matrix (None disables it).
            单个矩阵可生成的组合数上限（None 表示不限制）。
        max_upload_mb: Max upload size in MB.
            最大上传大小（MB）。
        allowed_extensions: Allowed upload file extensions.
            允许上传的文件扩展名。
        reject_existing_codes: Reject simple rows whose code already exists.
            简单导入时拒绝已存在的编码。
        sku_separator: Separator used for generated SKUs.
            生成 SKU 使用的分隔符。
    """

    max_combinations: int | None = DEFAULT_MAX_COMBINATIONS
    max_upload_mb: int = DEFAULT_MAX_UPLOAD_MB
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    reject_existing_codes: bool = False
    sku_separator: str = "-"

    @property
    def max_upload_bytes(self) -> int:
        """Return the upload limit in bytes.

        返回以字节为单位的上传限制。
        """
        return self.max_upload_mb * 1024 * 1024


def _env_get(*names: str) -> str | None:
    """Get the first non-empty environment variable value.

    获取第一个非空环境变量值。
    """
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip():
            return v.strip()
    return None


def _split_csv(value: str | None) -> list[str]:
    if value is None:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _parse_bool(value: str | None, default: bool) -> bool:
    """
    Parse a boolean flag from an environment value.
    从环境变量值解析布尔开关。

    Raises:
        ValueError: When the value is not a recognised boolean literal.
            值不是可识别的布尔字面量时抛出。
    """
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Invalid boolean value: {value}")


def _parse_limit(value: str | None, default: int | None) -> int | None:
    """
    Parse an integer limit; "none"/"0" disables the limit.
    解析整数上限；"none" 或 "0" 表示不限制。
    """
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in {"none", "off", "0"}:
        return None
    return int(lowered)


def _normalize_extensions(values: Iterable[str]) -> tuple[str, ...]:
    normalized = []
    for v in values:
        item = str(v).strip().lower()
        if not item:
            continue
        if not item.startswith("."):
            item = f".{item}"
        normalized.append(item)
    return tuple(sorted(set(normalized)))


def resolve_config(
    *,
    max_combinations: int | None = None,
    max_upload_mb: int | None = None,
    allowed_extensions: Iterable[str] | None = None,
    reject_existing_codes: bool | None = None,
    sku_separator: str | None = None,
    env_prefix: str = "TEMPLATE_IMPORT",
) -> ImportEngineConfig:
    """Resolve configuration from parameters and environment variables.

    从参数和环境变量解析配置。

    Resolution order / 解析优先级:
        1) function parameters / 函数参数
        2) env: `{env_prefix}_*` / 环境变量 `{env_prefix}_*`
        3) defaults / 默认值

    Args:
        max_combinations: Ceiling for matrix expansion.
            矩阵展开组合数上限。
        max_upload_mb: Max upload size in MB.
            最大上传大小（MB）。
        allowed_extensions: Allowed upload file extensions.
            允许上传的文件扩展名。
        reject_existing_codes: Reject existing codes in simple imports.
            简单导入时拒绝已存在编码。
        sku_separator: Separator for generated SKUs.
            生成 SKU 的分隔符。
        env_prefix: Prefix for environment variables.
            环境变量前缀（默认 TEMPLATE_IMPORT）。

    Returns:
        ImportEngineConfig: Resolved configuration.
            解析后的配置。
    """
    resolved_max = (
        max_combinations
        if max_combinations is not None
        else _parse_limit(_env_get(f"{env_prefix}_MAX_COMBINATIONS"), DEFAULT_MAX_COMBINATIONS)
    )
    env_upload = _env_get(f"{env_prefix}_MAX_UPLOAD_MB")
    resolved_upload = (
        max_upload_mb if max_upload_mb is not None else (int(env_upload) if env_upload else DEFAULT_MAX_UPLOAD_MB)
    )
    resolved_exts = _normalize_extensions(
        allowed_extensions
        if allowed_extensions is not None
        else (_split_csv(_env_get(f"{env_prefix}_ALLOWED_EXTENSIONS")) or DEFAULT_ALLOWED_EXTENSIONS)
    )
    resolved_reject = (
        reject_existing_codes
        if reject_existing_codes is not None
        else _parse_bool(_env_get(f"{env_prefix}_REJECT_EXISTING_CODES"), False)
    )
    resolved_sep = sku_separator if sku_separator is not None else (_env_get(f"{env_prefix}_SKU_SEPARATOR") or "-")
    return ImportEngineConfig(
        max_combinations=resolved_max,
        max_upload_mb=resolved_upload,
        allowed_extensions=resolved_exts,
        reject_existing_codes=resolved_reject,
        sku_separator=resolved_sep,
    )
