"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: schemas.py
@DateTime: 2026-03-03
@Docs: Pydantic schemas for templates, products, variations and import reports.
模板、商品、变体与导入报告的 Pydantic 模型。
"""

import re
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class TemplateType(StrEnum):
    """
    Template type enum; selects the import strategy.
    模板类型枚举，决定导入策略。
    """

    SIMPLE = "simple"
    VARIATION = "variation"
    MATRIX = "matrix"


RuleName = Literal["required", "min", "max", "min_length", "max_length", "pattern", "choices"]
FieldType = Literal["string", "number", "integer", "boolean"]


class FieldRule(BaseModel):
    """
    One validation rule declared on a template field.
    模板字段上声明的一条校验规则。

    Attributes:
        rule: Rule name.
        rule: 规则名。
        value: Rule argument (bound, pattern or choices).
        value: 规则参数（边界、正则或可选值）。
        message: Custom error message.
        message: 自定义错误消息。

    The argument is checked here so a malformed template is rejected when it
    is created, never halfway through an import.
    规则参数在此校验，格式错误的模板在创建时即被拒绝，而不会在导入中途失败。
    """

    model_config = ConfigDict(frozen=True)

    rule: RuleName
    value: Any | None = None
    message: str | None = None

    @model_validator(mode="after")
    def _check_value(self) -> "FieldRule":
        value = self.value
        match self.rule:
            case "min" | "max":
                if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
                    raise ValueError(f"Rule {self.rule} needs a numeric value")
                try:
                    bound = Decimal(str(value).strip())
                except InvalidOperation as exc:
                    raise ValueError(f"Rule {self.rule} needs a numeric value, got: {value}") from exc
                if not bound.is_finite():
                    raise ValueError(f"Rule {self.rule} needs a finite value, got: {value}")
            case "min_length" | "max_length":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ValueError(f"Rule {self.rule} needs a non-negative integer value")
            case "pattern":
                if not isinstance(value, str):
                    raise ValueError("Rule pattern needs a regular expression string")
                try:
                    re.compile(value)
                except re.error as exc:
                    raise ValueError(f"Invalid pattern {value!r}: {exc}") from exc
            case "choices":
                if not isinstance(value, (list, tuple)) or not value:
                    raise ValueError("Rule choices needs a non-empty list of values")
        return self


class FieldValidation(BaseModel):
    """
    Per-field type and rule list.
    单字段类型与规则列表。
    """

    model_config = ConfigDict(frozen=True)

    type: FieldType = "string"
    rules: list[FieldRule] = Field(default_factory=list)


class TemplateMappings(BaseModel):
    """
    Field mapping descriptor.
    字段映射描述。

    Attributes:
        required: Source fields every row must provide.
        required: 每行必须提供的字段。
        optional: Source fields that may be provided.
        optional: 可选字段。
        aliases: Source header -> canonical field name.
        aliases: 源表头 -> 规范字段名。
        identifier_fields: Fields identifying a record (variation templates).
        identifier_fields: 标识记录的字段（变体模板）。
        attribute_fields: Columns folded into the ``attributes`` mapping (variation templates).
        attribute_fields: 合并进 ``attributes`` 的列（变体模板）。
    """

    model_config = ConfigDict(frozen=True)

    required: list[str] = Field(default_factory=list)
    optional: list[str] = Field(default_factory=list)
    aliases: dict[str, str] = Field(default_factory=dict)
    identifier_fields: list[str] = Field(default_factory=list)
    attribute_fields: list[str] = Field(default_factory=list)


class TemplateCreate(BaseModel):
    """
    Template creation payload.
    模板创建请求体。

    ``type`` is one of :class:`TemplateType` or the name of a strategy
    registered on the dispatcher; known names are coerced to the enum.
    ``type`` 为 :class:`TemplateType` 之一，或调度器上注册的自定义策略名；已知名称会转换为枚举。
    """

    name: str = Field(min_length=1)
    type: TemplateType | str = Field(union_mode="left_to_right")
    description: str | None = None
    mappings: TemplateMappings = Field(default_factory=TemplateMappings)
    validations: dict[str, FieldValidation] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: TemplateType | str) -> TemplateType | str:
        if not value.strip():
            raise ValueError("Template type must not be blank")
        return value


class Template(TemplateCreate):
    """
    Persisted template. Immutable once created.
    已持久化的模板，创建后不可变。
    """

    model_config = ConfigDict(frozen=True)

    id: str
    client_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))


class ProductCreate(BaseModel):
    """
    Fields used to create a product.
    创建商品所需字段。
    """

    client_id: str | None = None
    code: str
    name: str
    barcode: str | None = None
    has_variations: bool = False
    price: Decimal | None = None
    stock: int | None = None


class Product(ProductCreate):
    """
    Persisted product reference.
    已持久化的商品。
    """

    id: str


class Combination(BaseModel):
    """
    One concrete variant of a parent product.
    父商品的一个具体变体组合。
    """

    sku: str
    attributes: dict[str, str]
    price: Decimal | None = None
    stock: int | None = None


def _ensure_unique_skus(combinations: list[Combination]) -> None:
    seen: set[str] = set()
    for combo in combinations:
        if combo.sku in seen:
            raise ValueError(f"Duplicate sku in variation config: {combo.sku}")
        seen.add(combo.sku)


class VariationConfig(BaseModel):
    """
    Variation configuration attached to a parent product.
    挂在父商品上的变体配置。

    Invariant: every combination sku is unique within the config.
    约束：配置内每个组合的 sku 唯一。
    """

    product_id: str
    attributes: dict[str, list[str]] = Field(default_factory=dict)
    combinations: list[Combination] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_skus(self) -> "VariationConfig":
        _ensure_unique_skus(self.combinations)
        return self


class CreateVariationsRequest(BaseModel):
    """
    Explicit variation configuration for one product.
    单个商品的显式变体配置。
    """

    attributes: dict[str, list[str]]
    combinations: list[Combination] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_skus(self) -> "CreateVariationsRequest":
        _ensure_unique_skus(self.combinations)
        return self


class GenerateMatrixRequest(BaseModel):
    """
    Generate every combination of an attribute matrix for one product.
    为单个商品生成属性矩阵的全部组合。

    Attributes:
        matrix: Attribute name -> options.
        matrix: 属性名 -> 取值列表。
        sku_prefix: Prefix for generated skus (``<prefix><index>``).
        sku_prefix: 生成 sku 的前缀（``<前缀><序号>``）。
        default_price: Price applied to every combination.
        default_price: 应用于所有组合的价格。
        default_stock: Stock applied to every combination.
        default_stock: 应用于所有组合的库存。
    """

    matrix: dict[str, list[str]]
    sku_prefix: str | None = None
    default_price: Decimal | None = None
    default_stock: int | None = None


OutcomeKind = Literal["product", "parent", "variation", "matrix"]


class RowOutcome(BaseModel):
    """
    Successfully processed row.
    处理成功的行。
    """

    row_number: int
    kind: OutcomeKind
    product: Product
    combinations: list[Combination] = Field(default_factory=list)


class ImportErrorItem(BaseModel):
    """
    Errors for one failed row.
    单个失败行的错误。
    """

    row_number: int
    row: dict[str, Any]
    errors: list[str]


class ImportReport(BaseModel):
    """
    Per-run import report. Never persisted.
    单次导入报告，不落库。

    Every row appears in exactly one of ``success`` or ``errors``.
    每行恰好出现在 ``success`` 或 ``errors`` 之一。
    """

    template_id: str
    template_type: TemplateType | str = Field(union_mode="left_to_right")
    total_rows: int
    success: list[RowOutcome] = Field(default_factory=list)
    errors: list[ImportErrorItem] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_count(self) -> int:
        return len(self.success)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return len(self.errors)
