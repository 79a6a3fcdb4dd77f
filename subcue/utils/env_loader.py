"""Utility for loading project-level environment variables.

The file uses `python-dotenv` to load a `.env` file sitting at repository root
*early* in the process so that the constants in `subcue.utils.constant` pick
up overrides such as `SUBCUE_DEFAULT_ENCODING` or `SUBCUE_LOG_LEVEL`.

Usage (call as soon as possible in your CLI / entry-point):

    from subcue.utils.env_loader import load_project_env
    load_project_env()

Re-invocation is a no-op, so callers can safely call multiple times.
"""

from __future__ import annotations

import functools
import pathlib
from typing import Final

from dotenv import load_dotenv

_REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]
_ENV_FILE: Final[pathlib.Path] = _REPO_ROOT / ".env"


@functools.lru_cache(maxsize=1)
def load_project_env(force: bool = False) -> bool:
    """Load the project-level `.env` file into the process environment.

    This function is decorated with `lru_cache` to ensure it runs only once.
    Variables already present in the environment are never overwritten.

    Args:
        force: If True, bypasses the cache and forces a reload of the
            environment file. Defaults to False.

    Returns:
        bool: True when a `.env` file was found and loaded.

    """
    if force:
        load_project_env.cache_clear()  # type: ignore[attr-defined]

    if not _ENV_FILE.exists():
        # Nothing to load – silently return.
        return False

    # `override=False` ensures we do **not** clobber env-vars already set
    # by the user / shell.
    return load_dotenv(dotenv_path=_ENV_FILE, override=False)


__all__ = [
    "load_project_env",
]
