"""
The config module is responsible for managing the configuration of zarrwrap and is based on the
Donfig python library.

Example:
    Short reads from v3 arrays are logged and tolerated by default. To turn them into errors,
    set ``read.allow_partial`` to ``False``:

    ```python
    from zarrwrap.core.config import config

    config.set({"read.allow_partial": False})
    ```

    The same value can be set with the environment variable ``ZARRWRAP_READ__ALLOW_PARTIAL``.
    The double underscore ``__`` is used to indicate nested access.

    ```bash
    export ZARRWRAP_READ__ALLOW_PARTIAL=False
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, Literal, cast

from donfig import Config as DConfig


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "ZARRWRAP_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for zarrwrap
config = Config(
    "zarrwrap",
    defaults=[
        {
            "array": {"order": "C"},
            "read": {"allow_partial": True},
        }
    ],
)


def parse_indexing_order(data: Any) -> Literal["C", "F"]:
    if data in ("C", "F"):
        return cast("Literal['C', 'F']", data)
    msg = f"Expected one of ('C', 'F'), got {data} instead."
    raise BadConfigError(msg)
