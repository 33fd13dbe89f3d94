"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-07
@Docs: Helper utilities.
辅助工具。
"""

from fastapi_template_import.helpers.rows import iter_rows, number_rows, strip_row_number

__all__ = ["iter_rows", "number_rows", "strip_row_number"]
