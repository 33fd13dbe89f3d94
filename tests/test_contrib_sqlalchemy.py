"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_contrib_sqlalchemy.py
@DateTime: 2026-03-10
@Docs: Tests for the SQLAlchemy contrib store.
SQLAlchemy 贡献存储层测试。
"""

from collections.abc import AsyncIterator
from decimal import Decimal

import pytest

pytest.importorskip("sqlalchemy")
pytest.importorskip("aiosqlite")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from fastapi_template_import.config import ImportEngineConfig  # noqa: E402
from fastapi_template_import.contrib.sqlalchemy import Base, SqlAlchemyProductStore  # noqa: E402
from fastapi_template_import.exceptions import PersistError, ProductNotFoundError  # noqa: E402
from fastapi_template_import.schemas import Combination, ProductCreate, TemplateType  # noqa: E402
from fastapi_template_import.service import TemplateImportService  # noqa: E402
from tests.conftest import CLIENT_ID, make_template  # noqa: E402


@pytest.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as s:
        yield s
    await engine.dispose()


@pytest.fixture
def sa_store(session: AsyncSession) -> SqlAlchemyProductStore:
    return SqlAlchemyProductStore(session)


class TestProducts:
    """Product persistence.
    商品持久化。
    """

    async def test_create_and_lookup(self, sa_store: SqlAlchemyProductStore) -> None:
        created = await sa_store.create_product(
            ProductCreate(client_id=CLIENT_ID, code="P1", name="Shirt", price=Decimal("9.90"), stock=3)
        )
        assert await sa_store.get_product(created.id) == created
        found = await sa_store.find_product_by_code("P1", client_id=CLIENT_ID)
        assert found is not None and found.id == created.id
        assert found.price == Decimal("9.90")
        assert await sa_store.find_product_by_code("P1", client_id="client-2") is None
        assert await sa_store.get_product("missing") is None

    async def test_update(self, sa_store: SqlAlchemyProductStore) -> None:
        created = await sa_store.create_product(ProductCreate(client_id=CLIENT_ID, code="P1", name="Shirt"))
        updated = await sa_store.update_product(created.id, {"has_variations": True, "name": "Tee"})
        assert updated.has_variations
        assert updated.name == "Tee"
        with pytest.raises(ProductNotFoundError):
            await sa_store.update_product("missing", {"name": "x"})

    async def test_duplicate_code_per_client(self, sa_store: SqlAlchemyProductStore) -> None:
        """Unique (client_id, code) surfaces as PersistError / 唯一约束冲突转换为 PersistError。"""
        await sa_store.create_product(ProductCreate(client_id=CLIENT_ID, code="P1", name="Shirt"))
        with pytest.raises(PersistError) as exc_info:
            await sa_store.create_product(ProductCreate(client_id=CLIENT_ID, code="P1", name="Again"))
        assert exc_info.value.error_code == "integrity_error"
        assert exc_info.value.status_code == 409
        await sa_store.create_product(ProductCreate(client_id="client-2", code="P1", name="Other client"))


class TestVariationConfigs:
    """Variation config persistence.
    变体配置持久化。
    """

    async def test_replace_and_append(self, sa_store: SqlAlchemyProductStore) -> None:
        product = await sa_store.create_product(ProductCreate(client_id=CLIENT_ID, code="TS", name="T-Shirt"))
        assert await sa_store.find_variation_config(product) is None

        await sa_store.create_or_replace_variation_config(
            product,
            {"color": ["red", "blue"]},
            [
                Combination(sku="TS-1", attributes={"color": "red"}, price=Decimal("10")),
                Combination(sku="TS-2", attributes={"color": "blue"}),
            ],
        )
        replaced = await sa_store.create_or_replace_variation_config(
            product, {"color": ["black"]}, [Combination(sku="TS-1", attributes={"color": "black"})]
        )
        assert [c.sku for c in replaced.combinations] == ["TS-1"]

        appended = await sa_store.append_combination(
            product, Combination(sku="TS-2", attributes={"color": "white", "size": "M"})
        )
        assert appended.attributes == {"color": ["black", "white"], "size": ["M"]}

        loaded = await sa_store.find_variation_config(product)
        assert loaded is not None
        assert [c.sku for c in loaded.combinations] == ["TS-1", "TS-2"]

        with pytest.raises(PersistError) as exc_info:
            await sa_store.append_combination(product, Combination(sku="TS-1", attributes={"color": "red"}))
        assert exc_info.value.error_code == "duplicate_sku"


async def test_variation_import_end_to_end(sa_store: SqlAlchemyProductStore) -> None:
    """Children resolve parents committed by earlier rows / 子行可解析之前行已提交的父商品。"""
    svc = TemplateImportService(store=sa_store, config=ImportEngineConfig())
    report = await svc.import_rows(
        make_template(TemplateType.VARIATION),
        [
            {"code": "TS", "name": "T-Shirt"},
            {"parent_code": "TS", "attributes": "color:red"},
            {"parent_code": "TS", "attributes": "color:blue"},
            {"parent_code": "NOPE", "attributes": "color:red"},
        ],
    )
    assert report.success_count == 3
    assert [(e.row_number, e.errors) for e in report.errors] == [(4, ["Parent product not found: NOPE"])]

    parent = await sa_store.find_product_by_code("TS", client_id=CLIENT_ID)
    assert parent is not None and parent.has_variations
    config = await sa_store.find_variation_config(parent)
    assert config is not None
    assert [c.sku for c in config.combinations] == ["TS-1", "TS-2"]
