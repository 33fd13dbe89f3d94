"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: rows.py
@DateTime: 2026-03-07
@Docs: Row bookkeeping for import runs.
导入运行的行记账辅助。

Rows reach the orchestrator either from the parser (already numbered) or from
callers of ``import_rows`` (plain mappings or a Polars DataFrame).
行要么来自解析器（已编号），要么来自 ``import_rows`` 的调用方（普通映射或 Polars DataFrame）。
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

ROW_NUMBER_KEY = "row_number"


def _is_polars_df(value: Any) -> bool:
    # polars stays optional: only look for it when it is already importable
    try:
        import polars as pl
    except ImportError:
        return False
    return isinstance(value, pl.DataFrame)


def iter_rows(data: Any) -> Iterator[dict[str, Any]]:
    """Yield each row of ``data`` as a fresh dict.
    将 ``data`` 的每一行作为新字典逐个产出。

    Raises:
        TypeError: When ``data`` is text, bytes, or not iterable.
            ``data`` 为文本、字节或不可迭代时抛出。
    """
    if _is_polars_df(data):
        yield from data.to_dicts()
    elif isinstance(data, Mapping):
        yield dict(data)
    elif isinstance(data, Iterable) and not isinstance(data, (str, bytes)):
        yield from (dict(row) for row in data)
    else:
        raise TypeError(f"Cannot read rows from {type(data).__name__} / 无法从该类型读取行")


def number_rows(data: Any) -> list[dict[str, Any]]:
    """Materialize rows, numbering from 1 those without a ``row_number``.
    物化行列表，并为缺少 ``row_number`` 的行从 1 开始编号。
    """
    rows = list(iter_rows(data))
    for position, row in enumerate(rows, start=1):
        row.setdefault(ROW_NUMBER_KEY, position)
        if not row[ROW_NUMBER_KEY]:
            row[ROW_NUMBER_KEY] = position
    return rows


def strip_row_number(row: Mapping[str, Any]) -> dict[str, Any]:
    """Drop the ``row_number`` key so error reports echo only source columns.
    去除 ``row_number`` 键，使错误报告只回显源列。
    """
    return {k: v for k, v in row.items() if k != ROW_NUMBER_KEY}
