"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_codecs.py
@DateTime: 2026-03-10
@Docs: Tests for built-in codecs.
内置 codecs 测试。
"""

from decimal import Decimal

import pytest

from fastapi_template_import.codecs import AttributesCodec, BoolCodec, DecimalCodec, IntCodec, MatrixCodec, is_blank
from fastapi_template_import.codecs.builtins import MAX_NUMBER_DIGITS


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank({})
    assert is_blank([])
    assert not is_blank(0)
    assert not is_blank({"color": []})


def test_decimal_codec_parse_and_format() -> None:
    codec = DecimalCodec()
    assert codec.parse(" 12.50 ") == Decimal("12.50")
    assert codec.parse("") is None
    assert codec.format(Decimal("12.50")) == "12.5"


def test_decimal_codec_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        DecimalCodec().parse("abc")
    with pytest.raises(ValueError):
        DecimalCodec().parse("NaN")


@pytest.mark.parametrize("value", ["1e1000000000", "1e-1000000000", "9" * (MAX_NUMBER_DIGITS + 1)])
def test_decimal_codec_rejects_huge_exponents(value: str) -> None:
    """Huge magnitudes are rejected before expansion / 超大数量级在展开前即被拒绝。"""
    with pytest.raises(ValueError, match="out of range"):
        DecimalCodec().parse(value)


def test_int_codec() -> None:
    codec = IntCodec()
    assert codec.parse("12") == 12
    assert codec.parse("12.0") == 12
    assert codec.parse(None) is None
    with pytest.raises(ValueError):
        codec.parse("12.5")


def test_int_codec_bounds() -> None:
    """A stock cell like 1e1000000000 never reaches int() / 1e1000000000 这类库存值不会进入 int()。"""
    codec = IntCodec()
    assert codec.parse("1e17") == 10**17
    assert codec.parse("9" * MAX_NUMBER_DIGITS) == int("9" * MAX_NUMBER_DIGITS)
    with pytest.raises(ValueError, match="out of range"):
        codec.parse("1e1000000000")
    with pytest.raises(ValueError, match="out of range"):
        codec.parse("1" + "0" * MAX_NUMBER_DIGITS)


def test_bool_codec() -> None:
    codec = BoolCodec()
    assert codec.parse("Yes") is True
    assert codec.parse("off") is False
    assert codec.parse(True) is True
    with pytest.raises(ValueError):
        codec.parse("maybe")


class TestAttributesCodec:
    """Tests for AttributesCodec.
    AttributesCodec 测试。
    """

    def test_compact_form(self) -> None:
        assert AttributesCodec().parse("color:red; size = M") == {"color": "red", "size": "M"}

    def test_json_form(self) -> None:
        assert AttributesCodec().parse('{"color": "red", "size": "M"}') == {"color": "red", "size": "M"}

    def test_mapping_passthrough(self) -> None:
        assert AttributesCodec().parse({"color": " red "}) == {"color": "red"}

    def test_blank_is_none(self) -> None:
        assert AttributesCodec().parse("") is None
        assert AttributesCodec().parse({}) is None

    def test_list_value_rejected(self) -> None:
        """A variation has one value per attribute / 变体每个属性只有一个值。"""
        with pytest.raises(ValueError):
            AttributesCodec().parse({"color": ["red", "blue"]})

    def test_missing_separator_rejected(self) -> None:
        with pytest.raises(ValueError):
            AttributesCodec().parse("red")

    def test_duplicate_name_rejected(self) -> None:
        """A repeated attribute is an error, not last-wins / 重复属性报错而非后者覆盖。"""
        with pytest.raises(ValueError, match="Duplicate attribute: color"):
            AttributesCodec().parse("color:red;color:blue")
        with pytest.raises(ValueError, match="Duplicate attribute: color"):
            AttributesCodec().parse('{"color": "red", "color": "blue"}')
        with pytest.raises(ValueError, match="Duplicate attribute: color"):
            AttributesCodec().parse({"color": "red", " color ": "blue"})

    def test_json_array_rejected(self) -> None:
        with pytest.raises(ValueError):
            AttributesCodec().parse('["red"]')

    def test_format(self) -> None:
        assert AttributesCodec().format({"color": "red", "size": "M"}) == "color:red;size:M"


class TestMatrixCodec:
    """Tests for MatrixCodec.
    MatrixCodec 测试。
    """

    def test_compact_form_keeps_order(self) -> None:
        parsed = MatrixCodec().parse("size:S|M|L;color:red|blue")
        assert parsed == {"size": ["S", "M", "L"], "color": ["red", "blue"]}
        assert list(parsed or {}) == ["size", "color"]

    def test_comma_options(self) -> None:
        assert MatrixCodec().parse("color:red,blue") == {"color": ["red", "blue"]}

    def test_json_form(self) -> None:
        assert MatrixCodec().parse('{"color": ["red", "blue"]}') == {"color": ["red", "blue"]}

    def test_empty_values_preserved(self) -> None:
        """Empty option list is kept so validation can reject it / 保留空取值列表以便校验拒绝。"""
        assert MatrixCodec().parse({"color": []}) == {"color": []}
        assert MatrixCodec().parse("color:") == {"color": []}

    def test_duplicate_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate attribute: size"):
            MatrixCodec().parse("size:S|M;color:red;size:L")
        with pytest.raises(ValueError, match="Duplicate attribute: size"):
            MatrixCodec().parse('{"size": ["S"], "size": ["L"]}')

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            MatrixCodec().parse("{not json")

    def test_format(self) -> None:
        assert MatrixCodec().format({"color": ["red", "blue"], "size": ["S"]}) == "color:red|blue;size:S"
