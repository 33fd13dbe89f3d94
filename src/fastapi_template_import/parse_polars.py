"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: parse_polars.py
@DateTime: 2026-03-07
@Docs: Polars-backed CSV/Excel row parsing.
基于 Polars 的 CSV/Excel 行解析。
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl

from fastapi_template_import.exceptions import ParseError

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
_UTF8_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True, slots=True)
class ParsedRows:
    """
    Parsed rows.
    解析结果。

    Attributes:
        rows: Row dicts; each carries a 1-based ``row_number``.
        rows: 行字典列表，每行带 1 起始的 ``row_number``。
        columns: Normalized header names.
        columns: 规范化后的表头。
    """

    rows: list[dict[str, Any]]
    columns: list[str]

    @property
    def total_rows(self) -> int:
        return len(self.rows)


def _read_frame(content: bytes, *, filename: str) -> pl.DataFrame:
    suffix = Path(filename).suffix.lower()
    if suffix in CSV_EXTENSIONS:
        return pl.read_csv(io.BytesIO(content.removeprefix(_UTF8_BOM)), infer_schema=False)
    if suffix in EXCEL_EXTENSIONS:
        df = pl.read_excel(io.BytesIO(content), engine="openpyxl")
        return df.select(pl.all().cast(pl.String))
    raise ParseError(
        message=f"Unsupported file format: {suffix or filename}",
        details={"filename": filename},
        error_code="unsupported_format",
    )


def normalize_header(name: str) -> str:
    """Lower-case and trim a header.
    表头转小写并去除首尾空白。
    """
    return str(name).strip().lower()


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def parse_rows(content: bytes, *, filename: str) -> ParsedRows:
    """
    Parse CSV/Excel bytes into ordered rows.
    将 CSV/Excel 字节解析为有序行。

    Headers are lower-cased and trimmed, cells are read as strings, fully blank
    rows are skipped. ``row_number`` is the 1-based data row position in the file.
    表头转小写并去空白，单元格按字符串读取，整行为空的行被跳过；
    ``row_number`` 为数据行在文件中的 1 起始位置。

    Raises:
        ParseError: When the file is empty, malformed, or of an unsupported format.
            文件为空、格式错误或不受支持时抛出。
    """
    if not content or not content.removeprefix(_UTF8_BOM).strip():
        raise ParseError(message="Empty file", details={"filename": filename}, error_code="empty_file")
    try:
        df = _read_frame(content, filename=filename)
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(
            message=f"Failed to parse file: {filename}",
            details={"filename": filename, "error": str(exc)},
        ) from exc

    df = df.rename({c: normalize_header(c) for c in df.columns})
    rows: list[dict[str, Any]] = []
    for index, raw in enumerate(df.to_dicts(), start=1):
        row = {k: _clean(v) for k, v in raw.items() if k}
        if all(v is None for v in row.values()):
            continue
        row["row_number"] = index
        rows.append(row)
    return ParsedRows(rows=rows, columns=list(df.columns))
