"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-02
@Docs: Package exports for fastapi_template_import.
fastapi_template_import 包导出定义。
"""

from fastapi_template_import.config import ImportEngineConfig, resolve_config
from fastapi_template_import.dispatcher import StrategyDispatcher
from fastapi_template_import.exceptions import (
    ExpansionError,
    ParentNotFoundError,
    ParseError,
    PersistError,
    ProductNotFoundError,
    RowProcessingError,
    TemplateImportError,
    TemplateNotFoundError,
    UnknownTemplateTypeError,
    UploadRejectedError,
)
from fastapi_template_import.expander import build_combinations, count_combinations, expand_attributes
from fastapi_template_import.log import configure_logging
from fastapi_template_import.parse import ParsedRows, parse_rows
from fastapi_template_import.schemas import (
    Combination,
    CreateVariationsRequest,
    FieldRule,
    FieldValidation,
    GenerateMatrixRequest,
    ImportErrorItem,
    ImportReport,
    Product,
    ProductCreate,
    RowOutcome,
    Template,
    TemplateCreate,
    TemplateMappings,
    TemplateType,
    VariationConfig,
)
from fastapi_template_import.service import TemplateImportService
from fastapi_template_import.stores import InMemoryProductStore, InMemoryTemplateRepository
from fastapi_template_import.strategies import (
    ImportStrategy,
    MatrixImportStrategy,
    RowValidation,
    SimpleImportStrategy,
    VariationImportStrategy,
)
from fastapi_template_import.templates import TemplateService
from fastapi_template_import.typing import ProductStore, TemplateRepository
from fastapi_template_import.variations import ProductVariationService

__all__ = [
    "TemplateImportService",
    "TemplateService",
    "ProductVariationService",
    "StrategyDispatcher",
    "ImportStrategy",
    "SimpleImportStrategy",
    "VariationImportStrategy",
    "MatrixImportStrategy",
    "RowValidation",
    "expand_attributes",
    "count_combinations",
    "build_combinations",
    "ImportEngineConfig",
    "resolve_config",
    "configure_logging",
    "ParsedRows",
    "parse_rows",
    "ProductStore",
    "TemplateRepository",
    "InMemoryProductStore",
    "InMemoryTemplateRepository",
    "TemplateImportError",
    "TemplateNotFoundError",
    "UnknownTemplateTypeError",
    "ParseError",
    "UploadRejectedError",
    "ProductNotFoundError",
    "RowProcessingError",
    "ParentNotFoundError",
    "PersistError",
    "ExpansionError",
    "Combination",
    "CreateVariationsRequest",
    "FieldRule",
    "FieldValidation",
    "GenerateMatrixRequest",
    "ImportErrorItem",
    "ImportReport",
    "Product",
    "ProductCreate",
    "RowOutcome",
    "Template",
    "TemplateCreate",
    "TemplateMappings",
    "TemplateType",
    "VariationConfig",
]
