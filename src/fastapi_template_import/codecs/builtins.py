"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: builtins.py
@DateTime: 2026-03-03
@Docs: Built-in codecs for product import cells.
商品导入单元格的内置编解码器。

Spreadsheet cells are flat strings, so structured values (variation attributes,
attribute matrices) are encoded as either a JSON object or a compact
``name:value;name:value`` form. Matrix values use ``|`` between options:
``color:red|blue;size:S|M|L``.
表格单元格只能是字符串，结构化值（变体属性、属性矩阵）使用 JSON 对象或
``名:值;名:值`` 紧凑格式编码；矩阵的多个取值用 ``|`` 分隔。
"""

import json
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi_template_import.codecs.base import Codec, is_blank

# Digits allowed on either side of the decimal point. Exponent notation such as
# "1e1000000000" is otherwise expanded in full by int() or fixed-point formatting.
# 小数点两侧允许的最大位数；否则 "1e1000000000" 之类的指数写法会被 int() 或定点格式化完整展开。
MAX_NUMBER_DIGITS = 18


class DecimalCodec(Codec[Decimal]):
    """Codec for Decimal values.
    Decimal 类型编解码器。
    """

    def parse(self, value: Any) -> Decimal | None:
        if is_blank(value):
            return None
        if isinstance(value, bool):
            raise ValueError(f"Invalid number: {value}")
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid number: {value}") from exc
        if not parsed.is_finite():
            raise ValueError(f"Invalid number: {value}")
        exponent = parsed.as_tuple().exponent
        if parsed.adjusted() >= MAX_NUMBER_DIGITS or (isinstance(exponent, int) and exponent < -MAX_NUMBER_DIGITS):
            raise ValueError(f"Number out of range: {value}")
        return parsed

    def format(self, value: Decimal | None) -> str:
        if value is None:
            return ""
        exponent = value.as_tuple().exponent
        if isinstance(exponent, int) and exponent < 0:
            return format(value, "f").rstrip("0").rstrip(".")
        return str(value)


class IntCodec(Codec[int]):
    """Codec for integer values; accepts ``"12"`` and ``"12.0"`` but not ``"12.5"``.
    整数编解码器；接受 ``"12"`` 与 ``"12.0"``，拒绝 ``"12.5"``。
    """

    def parse(self, value: Any) -> int | None:
        number = DecimalCodec().parse(value)
        if number is None:
            return None
        if number != number.to_integral_value():
            raise ValueError(f"Invalid integer: {value}")
        return int(number)

    def format(self, value: int | None) -> str:
        if value is None:
            return ""
        return str(value)


class BoolCodec(Codec[bool]):
    """Codec for bool values.
    布尔类型编解码器。
    """

    _truthy = {"1", "true", "yes", "y", "t", "on"}
    _falsy = {"0", "false", "no", "n", "f", "off"}

    def parse(self, value: Any) -> bool | None:
        if is_blank(value):
            return None
        if isinstance(value, bool):
            return value
        raw = str(value).strip().lower()
        if raw in self._truthy:
            return True
        if raw in self._falsy:
            return False
        raise ValueError(f"Invalid bool value: {value}")

    def format(self, value: bool | None) -> str:
        if value is None:
            return ""
        return "true" if value else "false"


def _unique_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate attribute: {key}")
        result[key] = value
    return result


def _load_json_object(text: str) -> dict[str, Any]:
    try:
        loaded = json.loads(text, object_pairs_hook=_unique_keys)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON object: {exc.msg}") from exc
    if not isinstance(loaded, dict):
        raise ValueError("JSON value must be an object")
    return loaded


def _split_pairs(text: str) -> list[tuple[str, str]]:
    """Split ``a:1;b:2`` (``=`` also accepted) into stripped pairs.
    将 ``a:1;b:2``（也接受 ``=``）拆分为去空白的键值对。

    Raises:
        ValueError: When a chunk lacks a separator or a name repeats.
            片段缺少分隔符或名称重复时抛出。
    """
    pairs: list[tuple[str, str]] = []
    seen: set[str] = set()
    for chunk in text.split(";"):
        if not chunk.strip():
            continue
        sep = ":" if ":" in chunk else "="
        if sep not in chunk:
            raise ValueError(f"Expected name{sep}value, got: {chunk.strip()}")
        name, _, raw = chunk.partition(sep)
        name = name.strip()
        if not name:
            raise ValueError(f"Missing attribute name in: {chunk.strip()}")
        if name in seen:
            raise ValueError(f"Duplicate attribute: {name}")
        seen.add(name)
        pairs.append((name, raw.strip()))
    return pairs


class AttributesCodec(Codec[dict[str, str]]):
    """Codec for a single variation's attribute assignment (name -> value).
    单个变体属性赋值（名 -> 值）编解码器。
    """

    def parse(self, value: Any) -> dict[str, str] | None:
        if is_blank(value):
            return None
        if isinstance(value, Mapping):
            source: Mapping[str, Any] = value
        else:
            text = str(value).strip()
            source = _load_json_object(text) if text.startswith("{") else dict(_split_pairs(text))
        result: dict[str, str] = {}
        for name, raw in source.items():
            key = str(name).strip()
            if not key:
                raise ValueError("Attribute name must not be blank")
            if key in result:
                raise ValueError(f"Duplicate attribute: {key}")
            if isinstance(raw, (list, tuple, dict)):
                raise ValueError(f"Attribute {key} must have a single value")
            result[key] = "" if raw is None else str(raw).strip()
        return result or None

    def format(self, value: dict[str, str] | None) -> str:
        if not value:
            return ""
        return ";".join(f"{k}:{v}" for k, v in value.items())


def _split_options(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(v).strip() for v in raw if not is_blank(v)]
    text = str(raw).strip()
    if not text:
        return []
    sep = "|" if "|" in text else ","
    return [v.strip() for v in text.split(sep) if v.strip()]


class MatrixCodec(Codec[dict[str, list[str]]]):
    """Codec for an attribute matrix (name -> list of options).
    属性矩阵（名 -> 取值列表）编解码器。

    Attribute insertion order is preserved; it drives SKU numbering.
    保留属性的插入顺序，它决定 SKU 编号。
    """

    def parse(self, value: Any) -> dict[str, list[str]] | None:
        if is_blank(value):
            return None
        if isinstance(value, Mapping):
            source: Mapping[str, Any] = value
        else:
            text = str(value).strip()
            source = _load_json_object(text) if text.startswith("{") else dict(_split_pairs(text))
        result: dict[str, list[str]] = {}
        for name, raw in source.items():
            key = str(name).strip()
            if not key:
                raise ValueError("Attribute name must not be blank")
            if key in result:
                raise ValueError(f"Duplicate attribute: {key}")
            if isinstance(raw, dict):
                raise ValueError(f"Attribute {key} must be a list of values")
            result[key] = _split_options(raw)
        return result

    def format(self, value: dict[str, list[str]] | None) -> str:
        if not value:
            return ""
        return ";".join(f"{k}:{'|'.join(v)}" for k, v in value.items())
