from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ndslice.core.common import product

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "BaseNDSliceError",
    "BoundsCheckError",
    "DimensionMismatchError",
    "ShapeError",
    "ViewReleasedError",
]


class BaseNDSliceError(ValueError):
    """
    Base error which all ndslice errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class ShapeError(BaseNDSliceError):
    """
    Raised when the length of a buffer does not match the product of the requested shape.

    The rejected buffer and shape are kept on the error so that callers can retry
    with a different shape.

    Attributes
    ----------
    buffer
        The buffer that was rejected. It is not copied.
    shape : tuple[int, ...]
        The rejected shape.
    required_length : int
        Number of elements an array of ``shape`` needs.
    actual_length : int
        Number of elements in ``buffer``.
    """

    _msg = (
        "Constructing an NDSlice of shape: {} would need a buffer of length {}, "
        "but a buffer of length {} was provided"
    )

    def __init__(self, buffer: Any, shape: Sequence[int]) -> None:
        self.buffer = buffer
        self.shape = tuple(shape)
        self.required_length = product(self.shape)
        self.actual_length = len(buffer)
        super().__init__(self.shape, self.required_length, self.actual_length)


class ViewReleasedError(BaseNDSliceError):
    """Raised when a view is used after it released its buffer."""


class BoundsCheckError(IndexError):
    _msg = ""

    def __init__(self, dim_len: int, axis: int) -> None:
        self._msg = f"index out of bounds for axis {axis} with length {dim_len}"
        super().__init__(self._msg)


class DimensionMismatchError(IndexError):
    """Raised when an index does not have exactly one coordinate per axis."""

    def __init__(self, expected: int, got: int) -> None:
        if got > expected:
            msg = f"too many indices for array; expected {expected}, got {got}"
        else:
            msg = f"too few indices for array; expected {expected}, got {got}"
        self.expected = expected
        self.got = got
        super().__init__(msg)
