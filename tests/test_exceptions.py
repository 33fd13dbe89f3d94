"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_exceptions.py
@DateTime: 2026-03-10
@Docs: Tests for exceptions.py module.
exceptions.py 模块测试。
"""

import pytest

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


class TestTemplateImportError:
    """Tests for TemplateImportError.
    TemplateImportError 测试。
    """

    def test_attributes(self) -> None:
        """All attributes assigned correctly / 所有属性正确赋值。"""
        exc = TemplateImportError(message="boom", status_code=422, details={"k": "v"}, error_code="custom")
        assert exc.message == "boom"
        assert exc.status_code == 422
        assert exc.details == {"k": "v"}
        assert exc.error_code == "custom"
        assert str(exc) == "boom"

    def test_defaults(self) -> None:
        exc = TemplateImportError(message="msg")
        assert exc.status_code == 400
        assert exc.error_code == "template_import_error"
        assert exc.details is None


@pytest.mark.parametrize(
    ("cls", "status_code", "error_code"),
    [
        (TemplateNotFoundError, 404, "template_not_found"),
        (UnknownTemplateTypeError, 400, "unknown_template_type"),
        (ParseError, 400, "parse_error"),
        (UploadRejectedError, 415, "upload_rejected"),
        (ProductNotFoundError, 404, "product_not_found"),
        (RowProcessingError, 422, "row_processing_error"),
        (ParentNotFoundError, 422, "parent_not_found"),
        (PersistError, 500, "persist_error"),
        (ExpansionError, 422, "expansion_error"),
    ],
)
def test_subclass_defaults(cls: type[TemplateImportError], status_code: int, error_code: str) -> None:
    """Each subclass carries its own defaults / 每个子类有各自默认值。"""
    exc = cls(message="x")
    assert isinstance(exc, TemplateImportError)
    assert exc.status_code == status_code
    assert exc.error_code == error_code


def test_row_scoped_hierarchy() -> None:
    """Parent lookup and persistence failures are row-scoped / 父商品查找与持久化失败属于行级错误。"""
    assert issubclass(ParentNotFoundError, RowProcessingError)
    assert issubclass(PersistError, RowProcessingError)
    assert not issubclass(TemplateNotFoundError, RowProcessingError)
