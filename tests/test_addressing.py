from __future__ import annotations

import itertools

import numpy as np
import pytest

from ndslice import DimensionMismatchError, Order, address

ROW_MAJOR_2X3 = [
    ((0, 0), 0),
    ((0, 1), 1),
    ((0, 2), 2),
    ((1, 0), 3),
    ((1, 1), 4),
    ((1, 2), 5),
]

COL_MAJOR_2X3 = [
    ((0, 0), 0),
    ((0, 1), 2),
    ((0, 2), 4),
    ((1, 0), 1),
    ((1, 1), 3),
    ((1, 2), 5),
]


@pytest.mark.parametrize(("index", "expected"), ROW_MAJOR_2X3)
@pytest.mark.parametrize("order", [Order.ROW_MAJOR, "C"])
def test_row_major_2d(order: Order | str, index: tuple[int, int], expected: int) -> None:
    assert address(order, (2, 3), index) == expected


@pytest.mark.parametrize(("index", "expected"), COL_MAJOR_2X3)
@pytest.mark.parametrize("order", [Order.COLUMN_MAJOR, "F"])
def test_col_major_2d(order: Order | str, index: tuple[int, int], expected: int) -> None:
    assert address(order, (2, 3), index) == expected


@pytest.mark.parametrize("order", ["C", "F"])
@pytest.mark.parametrize("shape", [(8,), (4, 2), (2, 2, 2), (3, 1, 4, 2), (1, 1, 1)])
def test_matches_numpy(order: str, shape: tuple[int, ...]) -> None:
    for index in itertools.product(*(range(s) for s in shape)):
        expected = np.ravel_multi_index(index, shape, order=order)
        assert address(order, shape, index) == expected


@pytest.mark.parametrize("order", ["C", "F"])
def test_covers_every_offset_once(order: str) -> None:
    shape = (3, 4, 5)
    offsets = [address(order, shape, i) for i in itertools.product(*(range(s) for s in shape))]
    assert sorted(offsets) == list(range(60))


@pytest.mark.parametrize("order", ["C", "F"])
def test_zero_dimensional(order: str) -> None:
    assert address(order, (), ()) == 0


@pytest.mark.parametrize("order", ["C", "F"])
def test_one_dimensional_is_identity(order: str) -> None:
    for i in range(7):
        assert address(order, (7,), (i,)) == i


def test_no_bounds_check() -> None:
    # out-of-range coordinates are plain arithmetic here
    assert address("C", (2, 3), (0, 3)) == 3
    assert address("C", (2, 3), (2, 0)) == 6


def test_large_shape_does_not_overflow() -> None:
    shape = (2**40, 2**40, 2**40)
    index = (2**40 - 1, 2**40 - 1, 2**40 - 1)
    assert address("C", shape, index) == 2**120 - 1


@pytest.mark.parametrize(("shape", "index"), [((2, 3), (1,)), ((2,), (0, 0)), ((), (0,))])
def test_dimension_mismatch(shape: tuple[int, ...], index: tuple[int, ...]) -> None:
    with pytest.raises(DimensionMismatchError):
        address("C", shape, index)


def test_deterministic_and_pure() -> None:
    shape = [2, 3, 4]
    index = [1, 2, 3]
    first = address("F", shape, index)
    second = address("F", shape, index)
    assert first == second
    assert shape == [2, 3, 4]
    assert index == [1, 2, 3]


def test_invalid_order() -> None:
    with pytest.raises(ValueError, match="Expected one of"):
        address("K", (2, 3), (0, 0))
