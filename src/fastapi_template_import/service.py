"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: service.py
@DateTime: 2026-03-08
@Docs: Template import orchestration service.
模板导入编排服务。

One run, one pass, no retries:
单次运行、单次遍历、不重试：

        1. Resolve the template for the client (missing -> TemplateNotFoundError).
            解析客户模板（不存在 -> TemplateNotFoundError）。
        2. Resolve the strategy by template type (unknown -> UnknownTemplateTypeError).
            按模板类型解析策略（未知 -> UnknownTemplateTypeError）。
        3. Parse bytes into rows (failure -> ParseError).
            将字节解析为行（失败 -> ParseError）。
        4. For each row in order: validate, then process; failures are row-scoped.
            逐行按序校验并处理；失败只影响该行。
        5. Call the strategy's after-process hook once.
            调用一次策略的批后钩子。
        6. Return the report.
            返回报告。

Steps 1-3 raise before any row is touched and return no partial report.
步骤 1-3 在处理任何行之前抛出，不返回部分报告。

Rows are processed strictly sequentially: a variation child can only resolve a
parent committed by an earlier row.
行严格按顺序处理：变体子行只能解析到之前行已提交的父商品。
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from fastapi import UploadFile

from fastapi_template_import.config import ImportEngineConfig, resolve_config
from fastapi_template_import.dispatcher import StrategyDispatcher
from fastapi_template_import.exceptions import TemplateImportError, UploadRejectedError
from fastapi_template_import.helpers import number_rows, strip_row_number
from fastapi_template_import.parse import parse_rows
from fastapi_template_import.rules import apply_header_aliases, check_template_rules
from fastapi_template_import.schemas import ImportErrorItem, ImportReport, RowOutcome, Template
from fastapi_template_import.strategies import ImportStrategy
from fastapi_template_import.strategies.base import row_number_of
from fastapi_template_import.templates import TemplateService
from fastapi_template_import.typing import ProductStore, Row, RowParseFn
from fastapi_template_import.validation_core import ErrorCollector

logger = structlog.get_logger(__name__)


def _default_parser(content: bytes, *, filename: str) -> list[Row]:
    return parse_rows(content, filename=filename).rows


class TemplateImportService:
    """Run template-driven product imports.

    执行模板驱动的商品导入。

    Examples:
        >>> from fastapi_template_import import InMemoryProductStore, TemplateImportService
        >>> svc = TemplateImportService(store=InMemoryProductStore())
        >>> # report = await svc.run_import(template_id, "client-1", csv_bytes, filename="items.csv")
    """

    def __init__(
        self,
        *,
        store: ProductStore,
        templates: TemplateService | None = None,
        config: ImportEngineConfig | None = None,
        dispatcher: StrategyDispatcher | None = None,
        parser: RowParseFn | None = None,
    ) -> None:
        """
        Initialize the import service.
        初始化导入服务。

        Args:
            store: Record persistence used by the strategies.
                策略使用的记录持久化。
            templates: Template store (in-memory by default).
                模板存储（默认内存实现）。
            config: Engine configuration.
                引擎配置。
            dispatcher: Strategy dispatcher (built from store/config by default).
                策略分发器（默认基于 store/config 构建）。
            parser: Row source for uploaded bytes.
                上传字节的行来源。
        """
        self.store = store
        self.templates = templates or TemplateService()
        self.config = config or resolve_config()
        self.dispatcher = dispatcher or StrategyDispatcher(store=store, config=self.config)
        self.parser: RowParseFn = parser or _default_parser

    async def run_import(
        self,
        template_id: str,
        client_id: str,
        content: bytes,
        *,
        filename: str = "import.csv",
    ) -> ImportReport:
        """Import a file's bytes using a client's template.

        使用客户模板导入文件字节。

        Args:
            template_id: Template id.
                模板 id。
            client_id: Client owning the template.
                模板所属客户。
            content: Raw file bytes.
                文件原始字节。
            filename: Original filename; its extension selects the reader.
                原始文件名，扩展名决定读取方式。

        Returns:
            ImportReport: Successes and row errors.
                成功与行错误报告。

        Raises:
            TemplateNotFoundError: Template missing for this client.
                该客户模板不存在。
            UnknownTemplateTypeError: No strategy for the template type.
                模板类型无对应策略。
            ParseError: File could not be parsed.
                文件无法解析。
        """
        template = await self.templates.find_one(template_id, client_id)
        strategy = self.dispatcher.get_strategy(template.type, template=template)
        rows = self.parser(content, filename=filename)
        return await self._run(template, strategy, number_rows(rows))

    async def import_rows(self, template: Template, rows: Iterable[Row] | Any) -> ImportReport:
        """Import already-parsed rows with a resolved template.

        使用已解析的模板导入已解析的行。

        Args:
            template: Resolved template.
                已解析的模板。
            rows: Row mappings, a Polars DataFrame, or a single mapping.
                行映射、Polars DataFrame 或单个映射。
        """
        strategy = self.dispatcher.get_strategy(template.type, template=template)
        return await self._run(template, strategy, number_rows(rows))

    async def import_upload(self, template_id: str, client_id: str, file: UploadFile) -> ImportReport:
        """Read a FastAPI upload (size/extension limited), then run the import.

        读取 FastAPI 上传文件（限制大小与扩展名），然后执行导入。

        Raises:
            UploadRejectedError: Extension not allowed (415) or file too large (413).
                扩展名不允许（415）或文件过大（413）。
        """
        filename = file.filename or "upload"
        ext = Path(filename).suffix.lower()
        if self.config.allowed_extensions and ext not in self.config.allowed_extensions:
            raise UploadRejectedError(
                message=f"Unsupported file extension: {ext} / 不支持的文件扩展名: {ext}",
                details={"filename": filename, "allowed": list(self.config.allowed_extensions)},
            )
        chunks: list[bytes] = []
        size = 0
        while True:
            chunk = await file.read(1024 * 1024)
            if not chunk:
                break
            size += len(chunk)
            if size > self.config.max_upload_bytes:
                raise UploadRejectedError(
                    message="File too large / 上传文件过大",
                    status_code=413,
                    details={"max_upload_mb": self.config.max_upload_mb},
                    error_code="file_too_large",
                )
            chunks.append(chunk)
        return await self.run_import(template_id, client_id, b"".join(chunks), filename=filename)

    async def _run(self, template: Template, strategy: ImportStrategy[Any], rows: list[Row]) -> ImportReport:
        log = logger.bind(template_id=template.id, client_id=template.client_id, template_type=str(template.type))
        log.info("import_started", total_rows=len(rows), **strategy.describe())

        success: list[RowOutcome] = []
        errors: list[ImportErrorItem] = []
        for raw in rows:
            row = apply_header_aliases(raw, template.mappings.aliases)
            row_number = row_number_of(row)

            collector = ErrorCollector()
            collector.extend(check_template_rules(template, row))
            verdict = await strategy.validate_row(row)
            collector.extend(verdict.errors)
            if not collector.ok:
                errors.append(ImportErrorItem(row_number=row_number, row=strip_row_number(raw), errors=collector.errors))
                log.info("row_invalid", row_number=row_number, errors=collector.errors)
                continue

            try:
                outcome = await strategy.process_row(row)
            except TemplateImportError as exc:
                errors.append(ImportErrorItem(row_number=row_number, row=strip_row_number(raw), errors=[exc.message]))
                log.info("row_failed", row_number=row_number, error_code=exc.error_code, error=exc.message)
                continue
            except Exception as exc:
                message = str(exc) or type(exc).__name__
                errors.append(ImportErrorItem(row_number=row_number, row=strip_row_number(raw), errors=[message]))
                log.warning("row_failed", row_number=row_number, error=message, exc_info=True)
                continue
            success.append(outcome)

        await strategy.after_process(success)
        log.info("import_finished", total_rows=len(rows), success=len(success), errors=len(errors))
        return ImportReport(
            template_id=template.id,
            template_type=template.type,
            total_rows=len(rows),
            success=success,
            errors=errors,
        )
