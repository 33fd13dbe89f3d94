"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-03
@Docs: Codecs for decoding product import cells.
商品导入单元格编解码器。
"""

from fastapi_template_import.codecs.base import Codec, is_blank
from fastapi_template_import.codecs.builtins import (
    AttributesCodec,
    BoolCodec,
    DecimalCodec,
    IntCodec,
    MatrixCodec,
)

__all__ = [
    "AttributesCodec",
    "BoolCodec",
    "Codec",
    "DecimalCodec",
    "IntCodec",
    "MatrixCodec",
    "is_blank",
]
