from ndslice._version import version as __version__
from ndslice.core.addressing import address
from ndslice.core.common import Order
from ndslice.core.config import config
from ndslice.core.view import NDSlice, NDSliceMut
from ndslice.errors import (
    BaseNDSliceError,
    BoundsCheckError,
    DimensionMismatchError,
    ShapeError,
    ViewReleasedError,
)

__all__ = [
    "BaseNDSliceError",
    "BoundsCheckError",
    "DimensionMismatchError",
    "NDSlice",
    "NDSliceMut",
    "Order",
    "ShapeError",
    "ViewReleasedError",
    "__version__",
    "address",
    "config",
]
