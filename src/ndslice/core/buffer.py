from __future__ import annotations

import ctypes
from collections.abc import Mapping
from logging import getLogger
from typing import Any, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from ndslice.core.config import config as ndslice_config

logger = getLogger(__name__)

__all__ = [
    "BufferLike",
    "MutableBufferLike",
    "buffer_from_ptr",
    "check_buffer",
    "check_buffer_writeable",
]


@runtime_checkable
class BufferLike(Protocol):
    """Protocol for the flat, sized and indexable buffer underlying a view.

    Lists, tuples, ``array.array``, ``bytes``, ``bytearray``, one-dimensional
    ``memoryview`` objects and one-dimensional numpy arrays all qualify.
    """

    def __len__(self) -> int: ...

    def __getitem__(self, key: int) -> Any: ...


@runtime_checkable
class MutableBufferLike(BufferLike, Protocol):
    """Protocol for a buffer that also supports item assignment."""

    def __setitem__(self, key: int, value: Any) -> None: ...


def check_buffer(buffer: Any) -> None:
    """Raise if ``buffer`` cannot back a view.

    The buffer must be sized, indexable and, where it carries a notion of
    dimensionality (numpy arrays, memoryviews), one-dimensional.
    """
    if not isinstance(buffer, BufferLike):
        raise TypeError(
            f"buffer must be sized and indexable, got an instance of {type(buffer).__name__}"
        )
    if isinstance(buffer, Mapping):
        raise TypeError(
            f"buffer must be a flat sequence, got a mapping of type {type(buffer).__name__}"
        )
    ndim = getattr(buffer, "ndim", 1)
    if ndim != 1:
        raise ValueError(f"buffer: only 1-dim allowed, got {ndim}-dim")


def check_buffer_writeable(buffer: Any) -> None:
    """Raise if ``buffer`` cannot back a mutable view."""
    check_buffer(buffer)
    if not isinstance(buffer, MutableBufferLike):
        raise TypeError(f"buffer of type {type(buffer).__name__} does not support item assignment")
    if isinstance(buffer, np.ndarray) and not buffer.flags.writeable:
        raise TypeError("buffer is a read-only numpy array")
    if isinstance(buffer, memoryview) and buffer.readonly:
        raise TypeError("buffer is a read-only memoryview")


def buffer_from_ptr(
    ptr: int, length: int, dtype: npt.DTypeLike, *, writeable: bool
) -> npt.NDArray[Any]:
    """
    Reconstitute a flat numpy array over memory owned by someone else.

    The returned array does not own its memory and does not copy it.

    Parameters
    ----------
    ptr : int
        Address of the first element, e.g. ``ndarray.ctypes.data`` or ``ctypes.addressof(...)``.
    length : int
        Number of elements of ``dtype`` starting at ``ptr``.
    dtype : npt.DTypeLike
        Element type.
    writeable : bool
        Whether the returned array allows item assignment.

    Returns
    -------
    numpy.ndarray
        A one-dimensional array of ``length`` elements aliasing ``ptr``.

    Notes
    -----
    This is unsafe. The caller must guarantee that ``ptr`` is valid for reads
    (and writes, if ``writeable``) of ``length`` contiguous elements for as long
    as the array or any view built on it is in use, and that no other writer
    aliases that memory in the meantime. Violating this contract crashes the
    interpreter or silently corrupts memory. When ``from_ptr.check`` is enabled
    in the configuration, negative, null and misaligned pointers are rejected; nothing
    else can be verified.
    """
    dtype = np.dtype(dtype)
    ptr = int(ptr)
    length = int(length)
    if length < 0:
        raise ValueError(f"Expected a non-negative length. Got {length} instead")
    if ndslice_config.get("from_ptr.check"):
        if ptr < 0:
            raise ValueError(f"Expected a non-negative address. Got {ptr} instead")
        if ptr == 0 and length > 0:
            raise ValueError("null pointer passed with a non-zero length")
        if dtype.alignment > 1 and ptr % dtype.alignment != 0:
            raise ValueError(
                f"pointer {ptr:#x} is not aligned to {dtype.alignment} bytes for dtype {dtype}"
            )

    if length == 0:
        data = np.empty(0, dtype=dtype)
    else:
        raw = (ctypes.c_char * (length * dtype.itemsize)).from_address(ptr)
        data = np.frombuffer(raw, dtype=dtype, count=length)
    data.flags.writeable = writeable
    logger.debug(
        "reconstituted buffer of %d %s elements at %#x (writeable=%s)",
        length,
        dtype,
        ptr,
        writeable,
    )
    return data
