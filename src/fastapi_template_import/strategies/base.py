"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: base.py
@DateTime: 2026-03-05
@Docs: Import strategy contract: validate -> process -> after process.
导入策略契约：校验 -> 处理 -> 批后钩子。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from fastapi_template_import.config import ImportEngineConfig
from fastapi_template_import.exceptions import RowProcessingError
from fastapi_template_import.schemas import RowOutcome, Template, TemplateType
from fastapi_template_import.typing import ProductStore, Row
from fastapi_template_import.validation_core import RowContext


@dataclass(frozen=True, slots=True)
class RowValidation:
    """
    Validation verdict for one row.
    单行校验结论。

    Attributes:
        valid: True when the row may be processed.
        valid: 行可被处理时为 True。
        errors: Every problem found, not just the first.
        errors: 发现的全部问题，而非仅第一个。
    """

    valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "RowValidation":
        return cls(valid=not errors, errors=list(errors))


def row_number_of(row: Row) -> int:
    return int(row.get("row_number") or 0)


class ImportStrategy[TProjected](ABC):
    """
    Import strategy base class.
    导入策略基类。

    Each strategy projects the untyped row into its own typed struct before
    validating, so business logic never reads raw string keys.
    每个策略在校验前先将无类型的行投影为自身的类型化结构，业务逻辑不直接读取原始键。

    Lifecycle per run / 单次运行生命周期:
        validate_row(row) for every row, process_row(row) for valid rows,
        after_process(successes) once at the end.
        每行调用 validate_row，合法行调用 process_row，结束时调用一次 after_process。
    """

    template_type: ClassVar[TemplateType | str]

    def __init__(
        self,
        *,
        store: ProductStore,
        config: ImportEngineConfig,
        template: Template | None = None,
    ) -> None:
        """
        Initialize strategy.
        初始化策略。

        Args:
            store: Record persistence.
            store: 记录持久化。
            config: Engine configuration.
            config: 引擎配置。
            template: Template of the current run (optional for direct use).
            template: 当前运行的模板（直接使用时可省略）。
        """
        self.store = store
        self.config = config
        self.template = template

    @property
    def client_id(self) -> str | None:
        return self.template.client_id if self.template is not None else None

    @abstractmethod
    def project(self, ctx: RowContext) -> TProjected:
        """
        Project a row into the strategy's typed struct, emitting errors on ``ctx``.
        将行投影为策略的类型化结构，并在 ``ctx`` 上发射错误。
        """

    @abstractmethod
    async def handle(self, data: TProjected, *, row_number: int) -> RowOutcome:
        """
        Persist records for one projected row.
        为单个投影行持久化记录。
        """

    async def validate_row(self, row: Row) -> RowValidation:
        """
        Validate one row. Never raises; collects every problem.
        校验单行；不抛异常，收集全部问题。
        """
        ctx = RowContext(row=row)
        self.project(ctx)
        return RowValidation.from_errors(ctx.errors)

    async def process_row(self, row: Row) -> RowOutcome:
        """
        Process one validated row.
        处理一条已通过校验的行。

        Raises:
            RowProcessingError: When the row is invalid or a referenced record is missing.
            RowProcessingError: 行不合法或引用记录缺失时抛出。
        """
        ctx = RowContext(row=row)
        data = self.project(ctx)
        if ctx.errors:
            raise RowProcessingError(message="; ".join(ctx.errors), details={"errors": ctx.errors})
        return await self.handle(data, row_number=row_number_of(row))

    async def after_process(self, successes: list[RowOutcome]) -> None:
        """
        Hook invoked once after all rows; default is a no-op.
        所有行处理完成后调用一次的钩子；默认不做任何事。
        """
        return None

    def describe(self) -> dict[str, Any]:
        return {"strategy": type(self).__name__, "template_type": str(self.template_type)}
