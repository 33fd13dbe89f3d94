"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_variations.py
@DateTime: 2026-03-10
@Docs: Tests for variations.py module.
variations.py 模块测试。
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from fastapi_template_import.config import ImportEngineConfig
from fastapi_template_import.exceptions import ExpansionError, ProductNotFoundError
from fastapi_template_import.schemas import (
    Combination,
    CreateVariationsRequest,
    GenerateMatrixRequest,
    Product,
    ProductCreate,
)
from fastapi_template_import.stores import InMemoryProductStore
from fastapi_template_import.variations import ProductVariationService
from tests.conftest import CLIENT_ID


@pytest.fixture
def variations(store: InMemoryProductStore, config: ImportEngineConfig) -> ProductVariationService:
    return ProductVariationService(store=store, config=config)


@pytest.fixture
async def product(store: InMemoryProductStore) -> Product:
    return await store.create_product(ProductCreate(client_id=CLIENT_ID, code="TS", name="T-Shirt"))


class TestCreateVariations:
    """Tests for ProductVariationService.create_variations.
    create_variations 测试。
    """

    async def test_saves_config_and_marks_parent(
        self, variations: ProductVariationService, store: InMemoryProductStore, product: Product
    ) -> None:
        payload = CreateVariationsRequest(
            attributes={"color": ["red"]},
            combinations=[Combination(sku="TS-RED", attributes={"color": "red"}, stock=3)],
        )
        config = await variations.create_variations(product.id, payload)
        assert config.product_id == product.id
        assert [c.sku for c in config.combinations] == ["TS-RED"]
        stored = await store.get_product(product.id)
        assert stored is not None and stored.has_variations

    async def test_replaces_previous_config(self, variations: ProductVariationService, product: Product) -> None:
        await variations.create_variations(
            product.id,
            CreateVariationsRequest(
                attributes={"color": ["red"]},
                combinations=[Combination(sku="A", attributes={"color": "red"})],
            ),
        )
        await variations.create_variations(product.id, CreateVariationsRequest(attributes={"size": ["S"]}))
        config = await variations.find_by_product(product.id)
        assert config is not None
        assert config.attributes == {"size": ["S"]}
        assert config.combinations == []

    async def test_unknown_product(self, variations: ProductVariationService) -> None:
        with pytest.raises(ProductNotFoundError):
            await variations.create_variations("missing", CreateVariationsRequest(attributes={}))

    def test_duplicate_skus_rejected(self) -> None:
        """Skus are unique within one config / 单个配置内 sku 唯一。"""
        with pytest.raises(ValidationError):
            CreateVariationsRequest(
                attributes={"color": ["red"]},
                combinations=[
                    Combination(sku="A", attributes={"color": "red"}),
                    Combination(sku="A", attributes={"color": "red"}),
                ],
            )


class TestGenerateMatrix:
    """Tests for ProductVariationService.generate_matrix.
    generate_matrix 测试。
    """

    async def test_generates_prefixed_skus(self, variations: ProductVariationService, product: Product) -> None:
        payload = GenerateMatrixRequest(
            matrix={"color": ["red", "blue"], "size": ["S", "M"]},
            sku_prefix="TS",
            default_price=Decimal("19.99"),
            default_stock=10,
        )
        config = await variations.generate_matrix(product.id, payload)
        assert [c.sku for c in config.combinations] == ["TS1", "TS2", "TS3", "TS4"]
        assert config.combinations[1].attributes == {"color": "red", "size": "M"}
        assert all(c.price == Decimal("19.99") and c.stock == 10 for c in config.combinations)
        assert config.attributes == {"color": ["red", "blue"], "size": ["S", "M"]}

    async def test_no_prefix(self, variations: ProductVariationService, product: Product) -> None:
        config = await variations.generate_matrix(product.id, GenerateMatrixRequest(matrix={"color": ["red"]}))
        assert [c.sku for c in config.combinations] == ["1"]

    async def test_empty_attribute_rejected(self, variations: ProductVariationService, product: Product) -> None:
        with pytest.raises(ExpansionError):
            await variations.generate_matrix(product.id, GenerateMatrixRequest(matrix={"color": []}))
        assert await variations.find_by_product(product.id) is None


class TestFindByProduct:
    """Tests for ProductVariationService.find_by_product.
    find_by_product 测试。
    """

    async def test_none_without_config(self, variations: ProductVariationService, product: Product) -> None:
        assert await variations.find_by_product(product.id) is None

    async def test_unknown_product(self, variations: ProductVariationService) -> None:
        with pytest.raises(ProductNotFoundError):
            await variations.find_by_product("missing")
