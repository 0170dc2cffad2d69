from __future__ import annotations

import functools
import numbers
import operator
from collections.abc import Iterable
from enum import Enum
from typing import Any, Literal, TypeGuard

import numpy as np

from ndslice.core.config import config as ndslice_config

ShapeLike = Iterable[int] | int
Shape = tuple[int, ...]
MemoryOrder = Literal["C", "F"]


class Order(Enum):
    """
    Memory order of the buffer underlying a view.

    In row-major (``"C"``) order the last axis is contiguous; in column-major (``"F"``)
    order the first axis is contiguous.
    """

    ROW_MAJOR = "C"
    COLUMN_MAJOR = "F"


OrderLike = Order | MemoryOrder


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def is_integer(x: Any) -> TypeGuard[int]:
    """True if x is an integer (both pure Python or NumPy)."""
    return isinstance(x, numbers.Integral) and not is_bool(x)


def is_bool(x: Any) -> TypeGuard[bool | np.bool_]:
    """True if x is a boolean (both pure Python or NumPy)."""
    return type(x) in [bool, np.bool_]


def ensure_tuple(v: Any) -> tuple[Any, ...]:
    if isinstance(v, tuple):
        return v
    if isinstance(v, list):
        return tuple(v)
    return (v,)


def parse_shapelike(data: ShapeLike) -> tuple[int, ...]:
    if is_integer(data):
        if data < 0:
            raise ValueError(f"Expected a non-negative integer. Got {data} instead")
        return (int(data),)
    try:
        data_tuple = tuple(data)  # type: ignore[arg-type]
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(is_integer(v) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not all(v > -1 for v in data_tuple):
        msg = f"Expected all values to be non-negative. Got {data} instead."
        raise ValueError(msg)
    return tuple(int(v) for v in data_tuple)


def parse_order(data: Any) -> Order:
    """
    Normalize ``data`` to an :class:`Order`.

    ``None`` resolves to the configured default order (``ndslice.config["order"]``).
    """
    if data is None:
        data = ndslice_config.get("order")
    if isinstance(data, Order):
        return data
    if data in ("C", "F"):
        return Order(data)
    raise ValueError(f"Expected one of {tuple(o.value for o in Order)}, got {data} instead.")
