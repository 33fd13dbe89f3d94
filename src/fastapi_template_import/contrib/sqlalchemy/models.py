"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: models.py
@DateTime: 2026-03-09
@Docs: SQLAlchemy ORM models for products and variation configs.
商品与变体配置的 SQLAlchemy ORM 模型。
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base. / SQLAlchemy 声明式基类。"""


class ProductRow(Base):
    """Product table model.
    商品表模型。
    """

    __tablename__ = "import_products"
    __table_args__ = (UniqueConstraint("client_id", "code", name="uq_import_products_client_code"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    client_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    code: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    barcode: Mapped[str | None] = mapped_column(String(128), nullable=True)
    has_variations: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    stock: Mapped[int | None] = mapped_column(Integer, nullable=True)


class VariationConfigRow(Base):
    """Variation config table model; one row per parent product.
    变体配置表模型；每个父商品一行。
    """

    __tablename__ = "import_variation_configs"

    product_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("import_products.id", ondelete="CASCADE"), primary_key=True
    )
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    combinations: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
