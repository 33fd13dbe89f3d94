"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exceptions.py
@DateTime: 2026-03-02
@Docs: Template import error hierarchy.
模板导入异常体系。

Batch-fatal errors (template lookup, dispatch, parsing) are raised to the caller.
Row-scoped errors are raised inside a strategy and collected by the orchestrator.
批级致命错误直接抛给调用方；行级错误在策略内抛出并由编排器收集。
"""

from typing import Any


class TemplateImportError(Exception):
    """
    Template import error.
    模板导入异常。

    Attributes:
        message: Error message.
        message: 错误消息。
        status_code: HTTP status code.
        status_code: HTTP 状态码。
        details: Error details.
        details: 错误详情。
        error_code: Stable error code.
        error_code: 稳定错误码。
    """

    default_status_code: int = 400
    default_error_code: str = "template_import_error"

    def __init__(
        self,
        *,
        message: str,
        status_code: int | None = None,
        details: Any | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.details = details
        self.error_code = error_code or self.default_error_code


class TemplateNotFoundError(TemplateImportError):
    """
    Template not found for the requesting client.
    模板不存在（或不属于该客户）。
    """

    default_status_code = 404
    default_error_code = "template_not_found"


class UnknownTemplateTypeError(TemplateImportError):
    """
    Template type has no registered strategy.
    模板类型没有对应策略。
    """

    default_error_code = "unknown_template_type"


class ParseError(TemplateImportError):
    """
    Parse error.
    解析错误。
    """

    default_error_code = "parse_error"


class UploadRejectedError(TemplateImportError):
    """
    Upload rejected before parsing (size or extension).
    上传文件在解析前被拒绝（大小或扩展名）。
    """

    default_status_code = 415
    default_error_code = "upload_rejected"


class ProductNotFoundError(TemplateImportError):
    """
    Product not found.
    商品不存在。
    """

    default_status_code = 404
    default_error_code = "product_not_found"


class RowProcessingError(TemplateImportError):
    """
    Row-scoped processing failure. Never aborts the batch.
    行级处理失败，不会中断整批导入。
    """

    default_status_code = 422
    default_error_code = "row_processing_error"


class ParentNotFoundError(RowProcessingError):
    """
    Variation row references an unknown parent code.
    变体行引用了不存在的父商品编码。
    """

    default_error_code = "parent_not_found"


class PersistError(RowProcessingError):
    """
    Persist error.
    持久化错误。
    """

    default_status_code = 500
    default_error_code = "persist_error"


class ExpansionError(TemplateImportError):
    """
    Attribute matrix cannot be expanded (empty value list or too many combinations).
    属性矩阵无法展开（存在空值列表或组合数超限）。
    """

    default_status_code = 422
    default_error_code = "expansion_error"
