"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: parse.py
@DateTime: 2026-03-07
@Docs: Parse module facade with optional backend.
解析模块门面（可选后端）。
"""

from typing import TYPE_CHECKING, Any

from fastapi_template_import.exceptions import TemplateImportError


def _load_backend() -> Any:
    try:
        from fastapi_template_import import parse_polars

        return parse_polars
    except Exception as exc:  # pragma: no cover / 覆盖忽略
        raise TemplateImportError(
            message="Missing optional dependencies for parsing. Install extras: polars,xlsx / 缺少解析可选依赖，请安装: polars,xlsx",
            details={"error": str(exc)},
            error_code="missing_dependency",
        ) from exc


def parse_rows(content: bytes, *, filename: str) -> Any:
    """
    Parse CSV/Excel bytes to ParsedRows.
    将 CSV/Excel 字节解析为 ParsedRows。

    Args:
        content: Uploaded file bytes.
        content: 上传文件字节。
        filename: Original filename (its extension selects the reader).
        filename: 原始文件名（扩展名决定读取方式）。

    Returns:
        ParsedRows: Parsed result.
        ParsedRows: 解析结果。
    """
    backend = _load_backend()
    return backend.parse_rows(content, filename=filename)


if TYPE_CHECKING:
    from fastapi_template_import.parse_polars import ParsedRows as ParsedRows
else:

    class ParsedRows:  # noqa: D101 / no docstring / 无需文档字符串
        """
        ParsedRows placeholder when optional backend is missing.
        可选后端缺失时的 ParsedRows 占位类型。
        """
