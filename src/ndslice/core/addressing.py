"""
Address calculation for n-dimensional arrays laid out in a flat buffer.

See https://en.wikipedia.org/wiki/Row-_and_column-major_order#Address_calculation_in_general
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ndslice.core.common import Order
from ndslice.errors import DimensionMismatchError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ndslice.core.common import OrderLike

__all__ = ["address"]


def address(order: OrderLike, shape: Sequence[int], index: Sequence[int]) -> int:
    """
    Calculate the flat offset of ``index`` in an array of ``shape`` stored in ``order``.

    No bounds checking against ``shape`` is performed; an index with a coordinate
    greater than or equal to its extent produces an offset that belongs to another
    element, or lies past the end of the buffer.

    Parameters
    ----------
    order : Order | Literal["C", "F"]
        Memory order of the buffer.
    shape : Sequence[int]
        Extent of each axis.
    index : Sequence[int]
        One coordinate per axis.

    Returns
    -------
    int
        The flat offset. Zero-dimensional arrays have the single offset 0.

    Raises
    ------
    DimensionMismatchError
        If ``shape`` and ``index`` have different lengths.

    Examples
    --------
    >>> address("C", (2, 3), (1, 0))
    3
    >>> address("F", (2, 3), (1, 0))
    1
    """
    if len(shape) != len(index):
        raise DimensionMismatchError(len(shape), len(index))
    if order == Order.ROW_MAJOR or order == "C":
        return _row_major_address(shape, index)
    if order == Order.COLUMN_MAJOR or order == "F":
        return _col_major_address(shape, index)
    raise ValueError(f"Expected one of ('C', 'F'), got {order} instead.")


def _row_major_address(shape: Sequence[int], index: Sequence[int]) -> int:
    if not shape:
        return 0
    res = index[0]
    for i in range(1, len(shape)):
        res = res * shape[i] + index[i]
    return res


def _col_major_address(shape: Sequence[int], index: Sequence[int]) -> int:
    d = len(shape)
    if d == 0:
        return 0
    res = index[d - 1]
    for i in range(d - 2, -1, -1):
        res = res * shape[i] + index[i]
    return res
