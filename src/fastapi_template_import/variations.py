"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: variations.py
@DateTime: 2026-03-08
@Docs: Variation config management outside of file imports.
文件导入之外的变体配置管理。
"""

import structlog

from fastapi_template_import.config import ImportEngineConfig, resolve_config
from fastapi_template_import.exceptions import ProductNotFoundError
from fastapi_template_import.expander import build_combinations
from fastapi_template_import.schemas import (
    CreateVariationsRequest,
    GenerateMatrixRequest,
    Product,
    VariationConfig,
)
from fastapi_template_import.typing import ProductStore

logger = structlog.get_logger(__name__)


class ProductVariationService:
    """Create, generate and read a product's variation config.

    创建、生成与读取商品的变体配置。

    Writing a config always replaces the previous one for that product.
    写入配置总是替换该商品原有的配置。
    """

    def __init__(self, *, store: ProductStore, config: ImportEngineConfig | None = None) -> None:
        self.store = store
        self.config = config or resolve_config()

    async def _get_product(self, product_id: str) -> Product:
        product = await self.store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(message=f"Product not found: {product_id}", details={"id": product_id})
        return product

    async def create_variations(self, product_id: str, payload: CreateVariationsRequest) -> VariationConfig:
        """
        Mark the product as a variation parent and store its config.
        将商品标记为变体父商品并保存配置。

        Raises:
            ProductNotFoundError: Unknown product id.
            ProductNotFoundError: 商品 id 不存在。
        """
        product = await self._get_product(product_id)
        if not product.has_variations:
            product = await self.store.update_product(product.id, {"has_variations": True})
        config = await self.store.create_or_replace_variation_config(
            product, payload.attributes, payload.combinations
        )
        logger.info("variations_saved", product_id=product.id, combinations=len(config.combinations))
        return config

    async def generate_matrix(self, product_id: str, payload: GenerateMatrixRequest) -> VariationConfig:
        """
        Expand a matrix into skus ``<sku_prefix><index>`` and store it.
        将矩阵展开为 ``<sku_prefix><序号>`` 形式的 sku 并保存。

        Raises:
            ExpansionError: An attribute has no values or the ceiling is exceeded.
            ExpansionError: 属性无取值或组合数超限。
            ProductNotFoundError: Unknown product id.
            ProductNotFoundError: 商品 id 不存在。
        """
        combinations = build_combinations(
            payload.matrix,
            sku_prefix=payload.sku_prefix or "",
            separator="",
            price=payload.default_price,
            stock=payload.default_stock,
            max_combinations=self.config.max_combinations,
        )
        return await self.create_variations(
            product_id,
            CreateVariationsRequest(attributes=payload.matrix, combinations=combinations),
        )

    async def find_by_product(self, product_id: str) -> VariationConfig | None:
        """
        Return the product's variation config, or None when it has none.
        返回商品的变体配置；没有时返回 None。
        """
        product = await self._get_product(product_id)
        return await self.store.find_variation_config(product)
