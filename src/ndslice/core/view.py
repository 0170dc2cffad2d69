from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, ClassVar

from ndslice.core.addressing import address
from ndslice.core.buffer import buffer_from_ptr, check_buffer, check_buffer_writeable
from ndslice.core.common import (
    Order,
    ensure_tuple,
    is_integer,
    parse_order,
    parse_shapelike,
    product,
)
from ndslice.errors import (
    BoundsCheckError,
    DimensionMismatchError,
    ShapeError,
    ViewReleasedError,
)

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    import numpy.typing as npt

    from ndslice.core.buffer import BufferLike
    from ndslice.core.common import OrderLike, Shape, ShapeLike

logger = getLogger(__name__)

__all__ = ["NDSlice", "NDSliceMut"]


class _NDSliceBase:
    """
    Validation and addressing shared by :class:`NDSlice` and :class:`NDSliceMut`.

    Subclasses only decide whether the buffer has to be writeable.
    """

    _writeable: ClassVar[bool] = False

    _buffer: BufferLike | None
    _shape: Shape
    _order: Order

    def __init__(
        self, buffer: BufferLike, shape: ShapeLike, order: OrderLike | None = None
    ) -> None:
        if self._writeable:
            check_buffer_writeable(buffer)
        else:
            check_buffer(buffer)
        shape_parsed = parse_shapelike(shape)
        order_parsed = parse_order(order)
        if len(buffer) != product(shape_parsed):
            raise ShapeError(buffer, shape_parsed)

        self._buffer = buffer
        self._shape = shape_parsed
        self._order = order_parsed
        logger.debug("created %r over %s", self, type(buffer).__name__)

    @classmethod
    def row_ordered(cls, buffer: BufferLike, shape: ShapeLike) -> Self:
        """Create a view with row-major ordering from a buffer and the expected shape."""
        return cls(buffer, shape, Order.ROW_MAJOR)

    @classmethod
    def col_ordered(cls, buffer: BufferLike, shape: ShapeLike) -> Self:
        """Create a view with column-major ordering from a buffer and the expected shape."""
        return cls(buffer, shape, Order.COLUMN_MAJOR)

    @classmethod
    def from_ptr(
        cls,
        ptr: int,
        length: int,
        shape: ShapeLike,
        order: OrderLike | None = None,
        *,
        dtype: npt.DTypeLike,
    ) -> Self:
        """
        Create a view over ``length`` elements of ``dtype`` starting at the raw address ``ptr``.

        This is the unsafe entry point for memory owned outside of Python objects the
        caller can hand over, e.g. memory returned by a C library. The caller must
        guarantee that the memory is valid for ``length`` elements, outlives the view,
        and is not written by anyone else while the view is in use. None of this can be
        checked; see :func:`ndslice.core.buffer.buffer_from_ptr`.

        Parameters
        ----------
        ptr : int
            Address of the first element.
        length : int
            Number of elements available at ``ptr``.
        shape : ShapeLike
            Expected shape. Its product must equal ``length``.
        order : Order | Literal["C", "F"] | None
            Memory order; ``None`` uses the configured default.
        dtype : npt.DTypeLike
            Element type of the memory.

        Raises
        ------
        ShapeError
            If ``length`` does not match the product of ``shape``.
        """
        buffer = buffer_from_ptr(ptr, length, dtype, writeable=cls._writeable)
        return cls(buffer, shape, order)

    @classmethod
    def row_ordered_from_ptr(
        cls, ptr: int, length: int, shape: ShapeLike, *, dtype: npt.DTypeLike
    ) -> Self:
        """Same as :meth:`from_ptr` with row-major ordering."""
        return cls.from_ptr(ptr, length, shape, Order.ROW_MAJOR, dtype=dtype)

    @classmethod
    def col_ordered_from_ptr(
        cls, ptr: int, length: int, shape: ShapeLike, *, dtype: npt.DTypeLike
    ) -> Self:
        """Same as :meth:`from_ptr` with column-major ordering."""
        return cls.from_ptr(ptr, length, shape, Order.COLUMN_MAJOR, dtype=dtype)

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def order(self) -> Order:
        return self._order

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return product(self._shape)

    @property
    def buffer(self) -> BufferLike:
        """The borrowed buffer. It is the caller's object, not a copy."""
        return self._checked_buffer()

    @property
    def released(self) -> bool:
        return self._buffer is None

    def release(self) -> None:
        """
        Drop the reference to the buffer.

        Any further element access raises :class:`ViewReleasedError`. Releasing an
        already released view does nothing.
        """
        if self._buffer is not None:
            logger.debug("released %r", self)
        self._buffer = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()

    def address(self, index: Any) -> int:
        """
        Flat offset of ``index`` in the buffer.

        ``index`` is a tuple or list with one integer per axis; a bare integer is
        accepted for one-dimensional views and ``()`` for zero-dimensional views.

        Raises
        ------
        DimensionMismatchError
            If ``index`` does not have one coordinate per axis.
        BoundsCheckError
            If a coordinate is negative or not smaller than the extent of its axis.
        IndexError
            If a coordinate is not an integer.
        """
        self._checked_buffer()
        return address(self._order, self._shape, self._normalize_index(index))

    def _normalize_index(self, index: Any) -> tuple[int, ...]:
        index = ensure_tuple(index)
        if len(index) != len(self._shape):
            raise DimensionMismatchError(len(self._shape), len(index))
        for axis, (dim_sel, dim_len) in enumerate(zip(index, self._shape, strict=True)):
            if not is_integer(dim_sel):
                raise IndexError(
                    f"unsupported index item for axis {axis}; "
                    f"expected integer, got {type(dim_sel)!r}"
                )
            if dim_sel < 0 or dim_sel >= dim_len:
                raise BoundsCheckError(dim_len, axis)
        return tuple(int(i) for i in index)

    def _checked_buffer(self) -> BufferLike:
        if self._buffer is None:
            raise ViewReleasedError(f"operation forbidden on released {type(self).__name__}")
        return self._buffer

    def __getitem__(self, index: Any) -> Any:
        buffer = self._checked_buffer()
        return buffer[address(self._order, self._shape, self._normalize_index(index))]

    def __repr__(self) -> str:
        state = ", released" if self._buffer is None else ""
        return f"{type(self).__name__}(shape={self._shape}, order={self._order.value!r}{state})"


class NDSlice(_NDSliceBase):
    """
    Read-only n-dimensional view of a flat buffer.

    The buffer is not copied. Its length must equal the product of ``shape``.

    Parameters
    ----------
    buffer : BufferLike
        A one-dimensional, sized and indexable buffer.
    shape : ShapeLike
        Extent of each axis.
    order : Order | Literal["C", "F"] | None
        Memory order of ``buffer``. ``None`` uses the configured default
        (``ndslice.config["order"]``, row-major unless changed).

    Raises
    ------
    ShapeError
        If ``len(buffer)`` is not the product of ``shape``.

    Examples
    --------
    >>> rm = NDSlice([1, 2, 3, 4, 5, 6], (2, 3))
    >>> cm = NDSlice.col_ordered([1, 4, 2, 5, 3, 6], (2, 3))
    >>> rm[1, 0], cm[1, 0]
    (4, 4)
    """


class NDSliceMut(_NDSliceBase):
    """
    Mutable n-dimensional view of a flat buffer.

    Same as :class:`NDSlice`, except that the buffer must support item
    assignment and elements can be written with ``view[index] = value``.

    The view does no locking. While it is in use, nothing else should write
    to the same buffer.

    Examples
    --------
    >>> arr = [7, 2, 3, 4, 5, 8]
    >>> n = NDSliceMut(arr, (2, 3), "C")
    >>> n[0, 0] = 1
    >>> n[1, 2] = 6
    >>> arr
    [1, 2, 3, 4, 5, 6]
    """

    _writeable = True

    def __setitem__(self, index: Any, value: Any) -> None:
        buffer = self._checked_buffer()
        buffer[address(self._order, self._shape, self._normalize_index(index))] = value
