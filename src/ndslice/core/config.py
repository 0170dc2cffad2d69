"""
The config module is responsible for managing the configuration of ndslice and is based on the
Donfig python library.

Example:
    Views constructed without an explicit ``order`` use the configured default order. To make
    column-major the default:

    ```python
    from ndslice.core.config import config

    config.set({"order": "F"})
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the value
    with an environment variable. The environment variable ``NDSLICE_ORDER`` can be set to ``F``.
    The double underscore ``__`` is used to indicate nested access, e.g.
    ``NDSLICE_FROM_PTR__CHECK=False`` disables validation of raw pointers.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from donfig import Config as DConfig


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "NDSLICE_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for ndslice
config = Config(
    "ndslice",
    defaults=[
        {
            "order": "C",
            "from_ptr": {"check": True},
        }
    ],
)
