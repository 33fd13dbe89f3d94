"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: stores.py
@DateTime: 2026-03-04
@Docs: In-memory product store and template repository.
内存商品存储与模板仓库。

Used by tests and by applications that persist elsewhere after the run.
供测试以及在导入后自行持久化的应用使用。
"""

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from fastapi_template_import.exceptions import PersistError, ProductNotFoundError
from fastapi_template_import.schemas import (
    Combination,
    Product,
    ProductCreate,
    Template,
    TemplateCreate,
    VariationConfig,
)


class InMemoryProductStore:
    """In-memory ``ProductStore``.
    内存版 ``ProductStore``。

    Examples:
        >>> store = InMemoryProductStore()
        >>> # product = await store.create_product(ProductCreate(code="P1", name="Shirt"))
    """

    def __init__(self) -> None:
        self.products: dict[str, Product] = {}
        self.configs: dict[str, VariationConfig] = {}

    async def create_product(self, fields: ProductCreate) -> Product:
        product = Product(id=uuid4().hex, **fields.model_dump())
        self.products[product.id] = product
        return product

    async def get_product(self, product_id: str) -> Product | None:
        return self.products.get(product_id)

    async def find_product_by_code(self, code: str, *, client_id: str | None = None) -> Product | None:
        for product in self.products.values():
            if product.code != code:
                continue
            if client_id is not None and product.client_id != client_id:
                continue
            return product
        return None

    async def update_product(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        current = self.products.get(product_id)
        if current is None:
            raise ProductNotFoundError(message=f"Product not found: {product_id}", details={"id": product_id})
        updated = current.model_copy(update=dict(fields))
        self.products[product_id] = updated
        return updated

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
        self.configs[product.id] = config
        return config

    async def append_combination(self, product: Product, combination: Combination) -> VariationConfig:
        current = self.configs.get(product.id) or VariationConfig(product_id=product.id)
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
        config = VariationConfig(
            product_id=product.id,
            attributes=attributes,
            combinations=[*current.combinations, combination],
        )
        self.configs[product.id] = config
        return config

    async def find_variation_config(self, product: Product) -> VariationConfig | None:
        return self.configs.get(product.id)


class InMemoryTemplateRepository:
    """In-memory ``TemplateRepository``.
    内存版 ``TemplateRepository``。
    """

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    async def add(self, client_id: str, payload: TemplateCreate) -> Template:
        template = Template(id=uuid4().hex, client_id=client_id, **payload.model_dump())
        self._templates[template.id] = template
        return template

    async def get(self, template_id: str, client_id: str) -> Template | None:
        template = self._templates.get(template_id)
        if template is None or template.client_id != client_id:
            return None
        return template

    async def list_by_client(self, client_id: str) -> list[Template]:
        return [t for t in self._templates.values() if t.client_id == client_id]
