"""subcue – subtitle and caption decoding package init."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("subcue")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.3.0"

from subcue.api import decode  # noqa: E402

__all__ = ["__version__", "decode"]
