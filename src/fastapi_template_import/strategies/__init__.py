"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-06
@Docs: Import strategies.
导入策略。
"""

from fastapi_template_import.strategies.base import ImportStrategy, RowValidation
from fastapi_template_import.strategies.matrix import MatrixImportStrategy, MatrixRow
from fastapi_template_import.strategies.simple import SimpleImportStrategy, SimpleRow
from fastapi_template_import.strategies.variation import VariationImportStrategy, VariationRow

__all__ = [
    "ImportStrategy",
    "MatrixImportStrategy",
    "MatrixRow",
    "RowValidation",
    "SimpleImportStrategy",
    "SimpleRow",
    "VariationImportStrategy",
    "VariationRow",
]
