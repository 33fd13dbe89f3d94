"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: templates.py
@DateTime: 2026-03-04
@Docs: Client-scoped template store.
按客户隔离的模板存储。
"""

import structlog

from fastapi_template_import.exceptions import TemplateNotFoundError
from fastapi_template_import.schemas import Template, TemplateCreate
from fastapi_template_import.stores import InMemoryTemplateRepository
from fastapi_template_import.typing import TemplateRepository

logger = structlog.get_logger(__name__)


class TemplateService:
    """Create and resolve import templates for a client.

    为客户创建与解析导入模板。

    Templates are immutable once created; an import run references one by id.
    模板创建后不可变，导入运行通过 id 引用。
    """

    def __init__(self, repository: TemplateRepository | None = None) -> None:
        self.repository: TemplateRepository = repository or InMemoryTemplateRepository()

    async def create(self, client_id: str, payload: TemplateCreate) -> Template:
        """
        Create a template owned by ``client_id``.
        创建归属于 ``client_id`` 的模板。
        """
        template = await self.repository.add(client_id, payload)
        logger.info("template_created", template_id=template.id, client_id=client_id, template_type=template.type)
        return template

    async def find_all(self, client_id: str) -> list[Template]:
        return await self.repository.list_by_client(client_id)

    async def find_one(self, template_id: str, client_id: str) -> Template:
        """
        Resolve a template by id for a client.
        按 id 为客户解析模板。

        Raises:
            TemplateNotFoundError: When the template does not exist or belongs to another client.
            TemplateNotFoundError: 模板不存在或属于其他客户时抛出。
        """
        template = await self.repository.get(template_id, client_id)
        if template is None:
            raise TemplateNotFoundError(
                message=f"Template not found: {template_id}",
                details={"template_id": template_id, "client_id": client_id},
            )
        return template
