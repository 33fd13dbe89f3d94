"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: base.py
@DateTime: 2026-03-03
@Docs: Codec protocol for decoding raw cell values.
单元格原始值编解码器协议。
"""

from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class Codec(Protocol[T]):
    """Codec protocol for parsing and formatting cell values.
    用于解析与格式化单元格值的协议。
    """

    def parse(self, value: Any) -> T | None:
        """Parse a raw cell value into a typed value.
        将原始单元格值解析为类型化的值。

        Args:
            value: Raw value from the parsed row (usually a string).
                解析行中的原始值（通常为字符串）。
        Returns:
            The parsed value, or None if the input is blank.
                解析后的值；输入为空时返回 None。

        Raises:
            ValueError: When the value cannot be decoded.
                无法解码时抛出。
        """
        ...

    def format(self, value: T | None) -> str:
        """Format a typed value back into a cell string.
        将类型化的值格式化为单元格字符串。
        """
        ...


def is_blank(value: Any) -> bool:
    """Return True for None, empty strings and empty containers.
    None、空字符串与空容器视为空值。
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set)):
        return not value
    return False
