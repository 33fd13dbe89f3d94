"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: typing.py
@DateTime: 2026-03-04
@Docs: Shared protocols for the collaborators of an import run.
导入运行协作者的共享协议。
"""

from collections.abc import Mapping
from typing import Any, Protocol

from fastapi_template_import.schemas import (
    Combination,
    Product,
    ProductCreate,
    Template,
    TemplateCreate,
    VariationConfig,
)

type Row = dict[str, Any]


class ProductStore(Protocol):
    """
    Record persistence consumed by the strategies.
    策略使用的记录持久化协议。

    Implementations: ``InMemoryProductStore`` and the SQLAlchemy store in contrib.
    实现：``InMemoryProductStore`` 与 contrib 中的 SQLAlchemy 存储。
    """

    async def create_product(self, fields: ProductCreate) -> Product: ...

    async def get_product(self, product_id: str) -> Product | None: ...

    async def find_product_by_code(self, code: str, *, client_id: str | None = None) -> Product | None: ...

    async def update_product(self, product_id: str, fields: Mapping[str, Any]) -> Product: ...

    async def create_or_replace_variation_config(
        self,
        product: Product,
        attributes: Mapping[str, list[str]],
        combinations: list[Combination],
    ) -> VariationConfig: ...

    async def append_combination(self, product: Product, combination: Combination) -> VariationConfig: ...

    async def find_variation_config(self, product: Product) -> VariationConfig | None: ...


class TemplateRepository(Protocol):
    """
    Template persistence.
    模板持久化协议。
    """

    async def add(self, client_id: str, payload: TemplateCreate) -> Template: ...

    async def get(self, template_id: str, client_id: str) -> Template | None: ...

    async def list_by_client(self, client_id: str) -> list[Template]: ...


class RowParseFn(Protocol):
    """
    Row source: turns uploaded bytes into ordered rows.
    行来源：将上传字节转换为有序行。

    Returns:
        list[Row]: Rows with a 1-based ``row_number`` key.
        list[Row]: 带 1 起始 ``row_number`` 键的行列表。
    """

    def __call__(self, content: bytes, *, filename: str) -> list[Row]: ...
