"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: variation.py
@DateTime: 2026-03-06
@Docs: Variation strategy: flat rows declaring parents and child variations.
变体策略：扁平行声明父商品或子变体。

A row without ``parent_code`` creates a variation parent. A row with
``parent_code`` adds one combination to that parent. Parents must appear
before their children in the same file: rows are resolved in a single pass.
没有 ``parent_code`` 的行创建父商品；带 ``parent_code`` 的行为该父商品追加一个组合。
同一文件中父行必须先于子行出现：按单次遍历顺序解析。
"""

from dataclasses import dataclass, field
from decimal import Decimal

from fastapi_template_import.codecs import AttributesCodec, DecimalCodec, IntCodec
from fastapi_template_import.exceptions import ParentNotFoundError
from fastapi_template_import.schemas import Combination, Product, ProductCreate, RowOutcome, TemplateType
from fastapi_template_import.strategies.base import ImportStrategy
from fastapi_template_import.validation_core import RowContext


@dataclass(slots=True)
class VariationRow:
    code: str | None
    name: str | None
    parent_code: str | None
    attributes: dict[str, str] = field(default_factory=dict)
    barcode: str | None = None
    price: Decimal | None = None
    stock: int | None = None


class VariationImportStrategy(ImportStrategy[VariationRow]):
    """
    Parent/child linking strategy.
    父子关联策略。
    """

    template_type = TemplateType.VARIATION

    def _code(self, ctx: RowContext) -> str:
        code = ctx.get_str("code")
        if code or self.template is None:
            return code
        for name in self.template.mappings.identifier_fields:
            code = ctx.get_str(name)
            if code:
                return code
        return ""

    def _attributes(self, ctx: RowContext) -> dict[str, str]:
        attributes = ctx.decode("attributes", AttributesCodec()) or {}
        if self.template is not None:
            for name in self.template.mappings.attribute_fields:
                value = ctx.get_str(name)
                if value and name not in attributes:
                    attributes[name] = value
        return attributes

    def project(self, ctx: RowContext) -> VariationRow:
        code = self._code(ctx)
        parent_code = ctx.get_str("parent_code")
        attributes = self._attributes(ctx)
        if not code and not parent_code:
            ctx.add("Either code or parent_code is required")
        if parent_code and not attributes:
            ctx.add("attributes are required for variations")
        return VariationRow(
            code=code or None,
            name=ctx.get_str("name") or None,
            parent_code=parent_code or None,
            attributes=attributes,
            barcode=ctx.get_str("barcode") or None,
            price=ctx.decode("price", DecimalCodec()),
            stock=ctx.decode("stock", IntCodec()),
        )

    async def handle(self, data: VariationRow, *, row_number: int) -> RowOutcome:
        if data.parent_code is None:
            code = data.code or ""
            parent = await self.store.create_product(
                ProductCreate(
                    client_id=self.client_id,
                    code=code,
                    name=data.name or code,
                    barcode=data.barcode,
                    has_variations=True,
                )
            )
            return RowOutcome(row_number=row_number, kind="parent", product=parent)

        parent = await self.store.find_product_by_code(data.parent_code, client_id=self.client_id)
        if parent is None:
            raise ParentNotFoundError(
                message=f"Parent product not found: {data.parent_code}",
                details={"parent_code": data.parent_code},
            )
        if not parent.has_variations:
            parent = await self.store.update_product(parent.id, {"has_variations": True})

        sku = data.code or await self._next_sku(parent_code=data.parent_code, parent=parent)
        combination = Combination(sku=sku, attributes=data.attributes, price=data.price, stock=data.stock)
        await self.store.append_combination(parent, combination)
        return RowOutcome(row_number=row_number, kind="variation", product=parent, combinations=[combination])

    async def _next_sku(self, *, parent_code: str, parent: Product) -> str:
        config = await self.store.find_variation_config(parent)
        taken = {c.sku for c in config.combinations} if config is not None else set()
        index = len(taken) + 1
        while f"{parent_code}{self.config.sku_separator}{index}" in taken:
            index += 1
        return f"{parent_code}{self.config.sku_separator}{index}"
