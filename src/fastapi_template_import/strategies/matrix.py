"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: matrix.py
@DateTime: 2026-03-06
@Docs: Matrix strategy: one row expands an attribute matrix into many skus.
矩阵策略：一行属性矩阵展开为多个 sku。
"""

from dataclasses import dataclass, field
from decimal import Decimal

from fastapi_template_import.codecs import DecimalCodec, IntCodec, MatrixCodec
from fastapi_template_import.expander import build_combinations, check_matrix
from fastapi_template_import.schemas import ProductCreate, RowOutcome, TemplateType
from fastapi_template_import.strategies.base import ImportStrategy
from fastapi_template_import.validation_core import RowContext, required_message


@dataclass(slots=True)
class MatrixRow:
    code: str
    name: str | None
    matrix: dict[str, list[str]] = field(default_factory=dict)
    barcode: str | None = None
    price: Decimal | None = None
    stock: int | None = None


class MatrixImportStrategy(ImportStrategy[MatrixRow]):
    """
    Matrix expansion strategy.
    矩阵展开策略。

    Generated skus are ``<code><separator><index>`` in expansion order. Importing
    the same code again replaces the product's variation config instead of
    merging into it.
    生成的 sku 为 ``<编码><分隔符><序号>``，按展开顺序编号。再次导入相同编码会
    替换该商品的变体配置，而不是合并。
    """

    template_type = TemplateType.MATRIX

    def project(self, ctx: RowContext) -> MatrixRow:
        code = ctx.require("code")
        matrix: dict[str, list[str]] = {}
        if not ctx.has("matrix"):
            ctx.add(required_message("matrix"))
        else:
            decoded = ctx.decode("matrix", MatrixCodec())
            if decoded == {}:
                ctx.add(required_message("matrix"))
            elif decoded is not None:
                matrix = decoded
                for message in check_matrix(matrix, max_combinations=self.config.max_combinations):
                    ctx.add(f"matrix: {message}")
        return MatrixRow(
            code=code,
            name=ctx.get_str("name") or None,
            matrix=matrix,
            barcode=ctx.get_str("barcode") or None,
            price=ctx.decode("price", DecimalCodec()),
            stock=ctx.decode("stock", IntCodec()),
        )

    async def handle(self, data: MatrixRow, *, row_number: int) -> RowOutcome:
        combinations = build_combinations(
            data.matrix,
            sku_prefix=data.code,
            separator=self.config.sku_separator,
            price=data.price,
            stock=data.stock,
            max_combinations=self.config.max_combinations,
        )
        fields = {"name": data.name or data.code, "barcode": data.barcode, "has_variations": True}
        product = await self.store.find_product_by_code(data.code, client_id=self.client_id)
        if product is None:
            product = await self.store.create_product(
                ProductCreate(client_id=self.client_id, code=data.code, **fields)
            )
        else:
            product = await self.store.update_product(product.id, fields)
        await self.store.create_or_replace_variation_config(product, data.matrix, combinations)
        return RowOutcome(row_number=row_number, kind="matrix", product=product, combinations=combinations)
