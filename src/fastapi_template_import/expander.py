"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: expander.py
@DateTime: 2026-03-04
@Docs: Cartesian expansion of attribute matrices into variation combinations.
属性矩阵的笛卡尔积展开，生成变体组合。

Ordering is deterministic: attributes follow insertion order and the first
attribute varies slowest, so ``{color: [red, blue], size: [S, M]}`` yields
red/S, red/M, blue/S, blue/M. SKU numbering depends on this order.
顺序是确定的：属性按插入顺序，第一个属性变化最慢；SKU 编号依赖该顺序。
"""

import itertools
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal

from fastapi_template_import.exceptions import ExpansionError
from fastapi_template_import.schemas import Combination


def count_combinations(matrix: Mapping[str, Sequence[str]]) -> int:
    """
    Return the number of combinations without expanding.
    不展开直接返回组合数量。

    Args:
        matrix: Attribute name -> options.
        matrix: 属性名 -> 取值列表。

    Returns:
        int: Product of option counts (1 for an empty matrix).
        int: 各属性取值数量的乘积（空矩阵为 1）。
    """
    return math.prod(len(values) for values in matrix.values())


def check_matrix(matrix: Mapping[str, Sequence[str]], *, max_combinations: int | None = None) -> list[str]:
    """
    Collect every reason the matrix cannot be expanded.
    收集矩阵无法展开的全部原因。

    Args:
        matrix: Attribute name -> options.
        matrix: 属性名 -> 取值列表。
        max_combinations: Optional ceiling for the combination count.
        max_combinations: 可选的组合数上限。

    Returns:
        list[str]: Error messages (empty when expandable).
        list[str]: 错误消息（可展开时为空）。
    """
    errors: list[str] = []
    for name, values in matrix.items():
        if not values:
            errors.append(f"Attribute {name} has no values")
            continue
        seen: set[str] = set()
        for value in values:
            if value in seen:
                errors.append(f"Duplicate value {value} for attribute {name}")
            seen.add(value)
    if errors:
        return errors
    total = count_combinations(matrix)
    if max_combinations is not None and total > max_combinations:
        errors.append(f"Matrix expands to {total} combinations, limit is {max_combinations}")
    return errors


def expand_attributes(
    matrix: Mapping[str, Sequence[str]],
    *,
    max_combinations: int | None = None,
) -> list[dict[str, str]]:
    """
    Expand an attribute matrix into every attribute assignment.
    将属性矩阵展开为所有属性赋值。

    Args:
        matrix: Attribute name -> options.
        matrix: 属性名 -> 取值列表。
        max_combinations: Optional ceiling for the combination count.
        max_combinations: 可选的组合数上限。

    Returns:
        list[dict[str, str]]: One mapping per combination, in expansion order.
        list[dict[str, str]]: 每个组合一个映射，按展开顺序排列。

    Raises:
        ExpansionError: When an attribute has no values, values repeat, or the ceiling is exceeded.
        ExpansionError: 属性无取值、取值重复或超出上限时抛出。

    Examples:
        >>> expand_attributes({"color": ["red", "blue"], "size": ["S"]})
        [{'color': 'red', 'size': 'S'}, {'color': 'blue', 'size': 'S'}]
        >>> expand_attributes({})
        [{}]
    """
    errors = check_matrix(matrix, max_combinations=max_combinations)
    if errors:
        raise ExpansionError(message="; ".join(errors), details={"errors": errors})
    names = list(matrix.keys())
    return [dict(zip(names, values, strict=True)) for values in itertools.product(*(matrix[n] for n in names))]


def build_combinations(
    matrix: Mapping[str, Sequence[str]],
    *,
    sku_prefix: str,
    separator: str = "-",
    price: Decimal | None = None,
    stock: int | None = None,
    max_combinations: int | None = None,
) -> list[Combination]:
    """
    Expand a matrix and assign ``<prefix><separator><index>`` skus (1-based).
    展开矩阵并分配 ``<前缀><分隔符><序号>`` 形式的 sku（序号从 1 开始）。

    Args:
        matrix: Attribute name -> options.
        matrix: 属性名 -> 取值列表。
        sku_prefix: Sku prefix, usually the parent code.
        sku_prefix: sku 前缀，通常为父商品编码。
        separator: Separator between prefix and index.
        separator: 前缀与序号之间的分隔符。
        price: Price applied to every combination.
        price: 应用于每个组合的价格。
        stock: Stock applied to every combination.
        stock: 应用于每个组合的库存。
        max_combinations: Optional ceiling for the combination count.
        max_combinations: 可选的组合数上限。

    Returns:
        list[Combination]: Combinations with unique skus.
        list[Combination]: sku 唯一的组合列表。
    """
    assignments = expand_attributes(matrix, max_combinations=max_combinations)
    return [
        Combination(sku=f"{sku_prefix}{separator}{index}", attributes=attrs, price=price, stock=stock)
        for index, attrs in enumerate(assignments, start=1)
    ]
