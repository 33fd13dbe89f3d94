"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-03-10
@Docs: Shared test fixtures for the fastapi-template-import test suite.
测试套件的公共 fixtures。
"""

import io
from unittest.mock import MagicMock

import pytest
from fastapi import UploadFile

from fastapi_template_import.config import ImportEngineConfig
from fastapi_template_import.schemas import Template, TemplateCreate, TemplateMappings, TemplateType
from fastapi_template_import.service import TemplateImportService
from fastapi_template_import.stores import InMemoryProductStore
from fastapi_template_import.templates import TemplateService

CLIENT_ID = "client-1"


def make_upload_file(filename: str, content: bytes, content_type: str = "text/csv") -> UploadFile:
    """Create an UploadFile from bytes.
    从字节内容创建 UploadFile。
    """
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=MagicMock(get=lambda k, d=None: content_type if k == "content-type" else d),
    )


def make_template(template_type: TemplateType | str, **kwargs: object) -> Template:
    """Build a template without a repository.
    不经仓库直接构建模板。
    """
    return Template(id="tpl-1", client_id=CLIENT_ID, name="test", type=template_type, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def config() -> ImportEngineConfig:
    """Deterministic config, independent of environment variables.
    与环境变量无关的确定性配置。
    """
    return ImportEngineConfig(max_combinations=100)


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def template_service() -> TemplateService:
    return TemplateService()


@pytest.fixture
def service(
    store: InMemoryProductStore,
    template_service: TemplateService,
    config: ImportEngineConfig,
) -> TemplateImportService:
    """Import service wired to in-memory collaborators.
    接入内存协作者的导入服务。
    """
    return TemplateImportService(store=store, templates=template_service, config=config)


@pytest.fixture
async def simple_template(template_service: TemplateService) -> Template:
    return await template_service.create(CLIENT_ID, TemplateCreate(name="simple", type=TemplateType.SIMPLE))


@pytest.fixture
async def variation_template(template_service: TemplateService) -> Template:
    return await template_service.create(
        CLIENT_ID,
        TemplateCreate(
            name="variation",
            type=TemplateType.VARIATION,
            mappings=TemplateMappings(identifier_fields=["sku"], attribute_fields=["color", "size"]),
        ),
    )


@pytest.fixture
async def matrix_template(template_service: TemplateService) -> Template:
    return await template_service.create(CLIENT_ID, TemplateCreate(name="matrix", type=TemplateType.MATRIX))
