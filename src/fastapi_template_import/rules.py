"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: rules.py
@DateTime: 2026-03-05
@Docs: Template-declared field rules.
模板声明的字段规则。

A template may declare required fields (``mappings.required``) and, per field,
a value type plus a rule list (``validations``). These checks run before the
strategy's own validation and share its error list.
模板可以声明必填字段（``mappings.required``），并为每个字段声明类型与规则列表
（``validations``）。这些检查先于策略自身校验执行，并共用同一错误列表。
"""

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from fastapi_template_import.codecs import BoolCodec, DecimalCodec, IntCodec, is_blank
from fastapi_template_import.schemas import FieldRule, FieldValidation, Template
from fastapi_template_import.validation_core import RowContext, required_message

_TYPE_CODECS = {
    "number": DecimalCodec(),
    "integer": IntCodec(),
    "boolean": BoolCodec(),
}


def apply_header_aliases(row: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    """
    Rename source headers to canonical field names.
    将源表头重命名为规范字段名。

    Header matching is case-insensitive because parsed headers are lower-cased.
    解析后的表头为小写，因此匹配不区分大小写。
    """
    if not aliases:
        return dict(row)
    lookup = {str(k).strip().lower(): v for k, v in aliases.items()}
    renamed: dict[str, Any] = {}
    for key, value in row.items():
        target = lookup.get(str(key).strip().lower(), key)
        if target in renamed and is_blank(value):
            continue
        renamed[target] = value
    return renamed


def _rule_message(rule: FieldRule, default: str) -> str:
    return rule.message or default


def _check_rule(ctx: RowContext, name: str, rule: FieldRule, typed: Any) -> None:
    raw = ctx.get_str(name)
    match rule.rule:
        case "required":
            if not raw:
                ctx.add(_rule_message(rule, required_message(name)))
        case "min":
            if isinstance(typed, Decimal | int) and typed < Decimal(str(rule.value)):
                ctx.add(_rule_message(rule, f"{name} must be >= {rule.value}"))
        case "max":
            if isinstance(typed, Decimal | int) and typed > Decimal(str(rule.value)):
                ctx.add(_rule_message(rule, f"{name} must be <= {rule.value}"))
        case "min_length":
            if raw and len(raw) < int(rule.value):
                ctx.add(_rule_message(rule, f"{name} must be at least {rule.value} characters"))
        case "max_length":
            if raw and len(raw) > int(rule.value):
                ctx.add(_rule_message(rule, f"{name} must be at most {rule.value} characters"))
        case "pattern":
            if raw and re.fullmatch(str(rule.value), raw) is None:
                ctx.add(_rule_message(rule, f"{name} has an invalid format"))
        case "choices":
            allowed = {str(v) for v in (rule.value or [])}
            if raw and raw not in allowed:
                ctx.add(_rule_message(rule, f"{name} must be one of: {', '.join(sorted(allowed))}"))


def check_field(ctx: RowContext, name: str, validation: FieldValidation) -> None:
    """
    Check one field against its declared type and rules.
    按声明的类型与规则检查单个字段。
    """
    typed: Any = ctx.get_str(name) or None
    codec = _TYPE_CODECS.get(validation.type)
    if codec is not None and ctx.has(name):
        try:
            typed = codec.parse(ctx.row.get(name))
        except ValueError:
            ctx.add(f"{name} must be a valid {validation.type}")
            return
    for rule in validation.rules:
        _check_rule(ctx, name, rule, typed)


def check_template_rules(template: Template, row: Mapping[str, Any]) -> list[str]:
    """
    Run the template's required-field and per-field checks on one row.
    对单行执行模板的必填与字段规则检查。

    Args:
        template: Template carrying ``mappings`` and ``validations``.
            携带 ``mappings`` 与 ``validations`` 的模板。
        row: Row after header aliasing.
            应用表头别名后的行。

    Returns:
        list[str]: Error messages (empty when the row passes).
            错误消息列表（通过时为空）。
    """
    ctx = RowContext(row=row)
    for name in template.mappings.required:
        ctx.require(name)
    for name, validation in template.validations.items():
        check_field(ctx, name, validation)
    return ctx.errors
