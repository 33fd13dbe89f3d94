"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-09
@Docs: SQLAlchemy contrib store.
SQLAlchemy 贡献存储层。
"""

from fastapi_template_import.contrib.sqlalchemy.models import Base, ProductRow, VariationConfigRow
from fastapi_template_import.contrib.sqlalchemy.store import SqlAlchemyProductStore

__all__ = ["Base", "ProductRow", "SqlAlchemyProductStore", "VariationConfigRow"]
