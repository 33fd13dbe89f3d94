"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: simple.py
@DateTime: 2026-03-05
@Docs: Simple strategy: one row creates one flat product.
简单策略：一行创建一个普通商品。
"""

from dataclasses import dataclass
from decimal import Decimal

from fastapi_template_import.codecs import DecimalCodec, IntCodec
from fastapi_template_import.exceptions import RowProcessingError
from fastapi_template_import.schemas import ProductCreate, RowOutcome, TemplateType
from fastapi_template_import.strategies.base import ImportStrategy
from fastapi_template_import.validation_core import RowContext


@dataclass(slots=True)
class SimpleRow:
    code: str
    name: str
    barcode: str | None = None
    price: Decimal | None = None
    stock: int | None = None


class SimpleImportStrategy(ImportStrategy[SimpleRow]):
    """
    ``code`` and ``name`` are required; ``barcode``, ``price`` and ``stock`` are optional.
    ``code`` 与 ``name`` 必填；``barcode``、``price``、``stock`` 可选。
    """

    template_type = TemplateType.SIMPLE

    def project(self, ctx: RowContext) -> SimpleRow:
        code = ctx.require("code")
        name = ctx.require("name")
        return SimpleRow(
            code=code,
            name=name,
            barcode=ctx.get_str("barcode") or None,
            price=ctx.decode("price", DecimalCodec()),
            stock=ctx.decode("stock", IntCodec()),
        )

    async def handle(self, data: SimpleRow, *, row_number: int) -> RowOutcome:
        if self.config.reject_existing_codes:
            existing = await self.store.find_product_by_code(data.code, client_id=self.client_id)
            if existing is not None:
                raise RowProcessingError(
                    message=f"Product with code {data.code} already exists",
                    status_code=409,
                    details={"code": data.code},
                    error_code="duplicate_code",
                )
        product = await self.store.create_product(
            ProductCreate(
                client_id=self.client_id,
                code=data.code,
                name=data.name,
                barcode=data.barcode,
                price=data.price,
                stock=data.stock,
            )
        )
        return RowOutcome(row_number=row_number, kind="product", product=product)
