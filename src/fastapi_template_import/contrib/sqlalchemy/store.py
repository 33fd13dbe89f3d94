"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: store.py
@DateTime: 2026-03-09
@Docs: SQLAlchemy async ProductStore.
SQLAlchemy 异步 ProductStore。

Every write commits on its own: rows succeed or fail independently, and a
parent created by one row is visible to the lookups of later rows.
每次写入独立提交：各行独立成功或失败，前面行创建的父商品对后续行的查找可见。
"""

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fastapi_template_import.contrib.sqlalchemy.models import ProductRow, VariationConfigRow
from fastapi_template_import.exceptions import PersistError, ProductNotFoundError
from fastapi_template_import.schemas import Combination, Product, ProductCreate, VariationConfig


def _to_product(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        client_id=row.client_id,
        code=row.code,
        name=row.name,
        barcode=row.barcode,
        has_variations=bool(row.has_variations),
        price=row.price,
        stock=row.stock,
    )


def _to_config(row: VariationConfigRow) -> VariationConfig:
    return VariationConfig.model_validate(
        {"product_id": row.product_id, "attributes": row.attributes, "combinations": row.combinations}
    )


def _dump_combinations(combinations: list[Combination]) -> list[dict[str, Any]]:
    return [c.model_dump(mode="json") for c in combinations]


class SqlAlchemyProductStore:
    """``ProductStore`` backed by an ``AsyncSession``.
    基于 ``AsyncSession`` 的 ``ProductStore``。

    Examples:
        >>> # async with session_factory() as session:
        >>> #     store = SqlAlchemyProductStore(session)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self, *, action: str, details: dict[str, Any]) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise PersistError(
                message=f"Conflict while trying to {action}",
                status_code=409,
                details={**details, "error": str(exc.orig)},
                error_code="integrity_error",
            ) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistError(message=f"Failed to {action}", details={**details, "error": str(exc)}) from exc

    async def create_product(self, fields: ProductCreate) -> Product:
        product = Product(id=uuid4().hex, **fields.model_dump())
        self.session.add(ProductRow(**product.model_dump()))
        await self._commit(action=f"create product {fields.code}", details={"code": fields.code})
        return product

    async def get_product(self, product_id: str) -> Product | None:
        row = await self.session.get(ProductRow, product_id)
        return _to_product(row) if row is not None else None

    async def find_product_by_code(self, code: str, *, client_id: str | None = None) -> Product | None:
        stmt = select(ProductRow).where(ProductRow.code == code)
        if client_id is not None:
            stmt = stmt.where(ProductRow.client_id == client_id)
        row = (await self.session.execute(stmt.limit(1))).scalars().first()
        return _to_product(row) if row is not None else None

    async def update_product(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        row = await self.session.get(ProductRow, product_id)
        if row is None:
            raise ProductNotFoundError(message=f"Product not found: {product_id}", details={"id": product_id})
        for key, value in fields.items():
            setattr(row, key, value)
        product = _to_product(row)
        await self._commit(action=f"update product {product.code}", details={"id": product_id})
        return product

    async def create_or_replace_variation_config(
        self,
        product: Product,
        attributes: Mapping[str, list[str]],
        combinations: list[Combination],
    ) -> VariationConfig:
        config = VariationConfig(
            product_id=product.id,
            attributes={k: list(v) for k, v in attributes.items()},
            combinations=list(combinations),
        )
        row = await self.session.get(VariationConfigRow, product.id)
        if row is None:
            row = VariationConfigRow(product_id=product.id)
            self.session.add(row)
        row.attributes = config.attributes
        row.combinations = _dump_combinations(config.combinations)
        await self._commit(action=f"save variations for {product.code}", details={"product_id": product.id})
        return config

    async def append_combination(self, product: Product, combination: Combination) -> VariationConfig:
        row = await self.session.get(VariationConfigRow, product.id)
        current = _to_config(row) if row is not None else VariationConfig(product_id=product.id)
        if any(c.sku == combination.sku for c in current.combinations):
            raise PersistError(
                message=f"Duplicate sku for product {product.code}: {combination.sku}",
                status_code=409,
                details={"sku": combination.sku},
                error_code="duplicate_sku",
            )
        attributes = {k: list(v) for k, v in current.attributes.items()}
        for name, value in combination.attributes.items():
            values = attributes.setdefault(name, [])
            if value not in values:
                values.append(value)
        return await self.create_or_replace_variation_config(
            product, attributes, [*current.combinations, combination]
        )

    async def find_variation_config(self, product: Product) -> VariationConfig | None:
        row = await self.session.get(VariationConfigRow, product.id)
        return _to_config(row) if row is not None else None
