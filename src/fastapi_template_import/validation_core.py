"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation_core.py
@DateTime: 2026-03-05
@Docs: Core row validation primitives without business rules.
行校验核心原语（不包含业务规则）。

It only provides:
仅提供如下内容：
- ErrorCollector: append human-readable messages for one row.
    ErrorCollector：为单行追加可读错误消息。
- RowContext: per-row helper to read and decode values and emit errors.
    RowContext：行级读取、解码与错误发射辅助。
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from fastapi_template_import.codecs import Codec, is_blank

T = TypeVar("T")


def required_message(name: str) -> str:
    """Return the canonical "missing field" message.
    返回标准的"字段缺失"消息。
    """
    return f"{name} is required"


@dataclass(slots=True)
class ErrorCollector:
    """Collect error messages for one row, without duplicates.
    收集单行错误消息（去重）。
    """

    errors: list[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        if message not in self.errors:
            self.errors.append(message)

    def extend(self, messages: list[str]) -> None:
        for message in messages:
            self.add(message)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class RowContext:
    """Per-row helper to read values and emit errors.
    每行校验助手，用于读取值和发射错误。
    """

    row: Mapping[str, Any]
    collector: ErrorCollector = field(default_factory=ErrorCollector)

    def add(self, message: str) -> None:
        self.collector.add(message)

    def has(self, name: str) -> bool:
        """Return True when the field is present and not blank.
        字段存在且非空时返回 True。
        """
        return not is_blank(self.row.get(name))

    def get_str(self, name: str) -> str:
        """Get a stripped string value (empty string when missing).
        获取去空白的字符串值（缺失时返回空字符串）。
        """
        v = self.row.get(name)
        if v is None:
            return ""
        return str(v).strip()

    def require(self, name: str, message: str | None = None) -> str:
        """Read a required string field, emitting an error when blank.
        读取必填字符串字段，为空时发射错误。
        """
        v = self.get_str(name)
        if not v:
            self.add(message or required_message(name))
        return v

    def decode(self, name: str, codec: Codec[T]) -> T | None:
        """Decode a field with a codec; decoding failures become row errors.
        使用编解码器解码字段；解码失败记为行错误。
        """
        try:
            return codec.parse(self.row.get(name))
        except ValueError as exc:
            self.add(f"{name}: {exc}")
            return None

    @property
    def errors(self) -> list[str]:
        return self.collector.errors
