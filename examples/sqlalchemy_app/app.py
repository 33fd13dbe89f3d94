"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: app.py
@DateTime: 2026-03-10
@Docs: FastAPI app exposing template imports and variation endpoints with SQLAlchemy.
使用 SQLAlchemy 的 FastAPI 模板导入与变体端点示例。
"""

from typing import Any

from fastapi import FastAPI, File, Header, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fastapi_template_import import (
    CreateVariationsRequest,
    GenerateMatrixRequest,
    ImportEngineConfig,
    ProductVariationService,
    TemplateCreate,
    TemplateImportError,
    TemplateImportService,
    TemplateService,
    resolve_config,
)
from fastapi_template_import.contrib.sqlalchemy import SqlAlchemyProductStore

# ---------------------------------------------------------------------------
# Engine / session factory (overridden by tests via conftest.py)
# ---------------------------------------------------------------------------
engine = create_async_engine("sqlite+aiosqlite://", echo=False)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    config: ImportEngineConfig | None = None,
) -> FastAPI:
    """Create a FastAPI app for the SQLAlchemy example.
    创建 SQLAlchemy 示例的 FastAPI 应用。

    Args:
        session_factory: Override session factory for testing / 测试用会话工厂覆盖。
        config: Engine configuration / 引擎配置。

    Returns:
        FastAPI app instance / FastAPI 应用实例。
    """
    factory = session_factory or async_session_factory
    cfg = config or resolve_config()
    templates = TemplateService()
    app = FastAPI(title="Template Import Example")

    @app.exception_handler(TemplateImportError)
    async def _template_import_error_handler(request: Any, exc: TemplateImportError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
        )

    @app.post("/templates")
    async def create_template(payload: TemplateCreate, x_client_id: str = Header(...)) -> dict[str, Any]:
        """Create a client template / 创建客户模板。"""
        template = await templates.create(x_client_id, payload)
        return template.model_dump(mode="json")

    @app.get("/templates")
    async def list_templates(x_client_id: str = Header(...)) -> list[dict[str, Any]]:
        return [t.model_dump(mode="json") for t in await templates.find_all(x_client_id)]

    @app.post("/templates/{template_id}/import")
    async def run_import(
        template_id: str,
        file: UploadFile = File(...),
        x_client_id: str = Header(...),
    ) -> dict[str, Any]:
        """Upload a file and import it with the template / 上传文件并按模板导入。"""
        async with factory() as db:
            svc = TemplateImportService(store=SqlAlchemyProductStore(db), templates=templates, config=cfg)
            report = await svc.import_upload(template_id, x_client_id, file)
            return report.model_dump(mode="json")

    @app.post("/products/{product_id}/variations")
    async def create_variations(product_id: str, payload: CreateVariationsRequest) -> dict[str, Any]:
        async with factory() as db:
            svc = ProductVariationService(store=SqlAlchemyProductStore(db), config=cfg)
            return (await svc.create_variations(product_id, payload)).model_dump(mode="json")

    @app.post("/products/{product_id}/variations/matrix")
    async def generate_matrix(product_id: str, payload: GenerateMatrixRequest) -> dict[str, Any]:
        """Generate every combination of a matrix / 生成矩阵的全部组合。"""
        async with factory() as db:
            svc = ProductVariationService(store=SqlAlchemyProductStore(db), config=cfg)
            return (await svc.generate_matrix(product_id, payload)).model_dump(mode="json")

    @app.get("/products/{product_id}/variations")
    async def get_variations(product_id: str) -> dict[str, Any] | None:
        async with factory() as db:
            svc = ProductVariationService(store=SqlAlchemyProductStore(db), config=cfg)
            found = await svc.find_by_product(product_id)
            return found.model_dump(mode="json") if found is not None else None

    return app
