"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Final

from subcue.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Repository root resolved relative to this file (utils/constant.py → package → repo)
REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]

# Default path of the dotenv file containing runtime overrides
ENV_FILE: Final[pathlib.Path] = REPO_ROOT / ".env"

# Text encodings the SubRip lexer accepts as a hint or default. ``latin-1`` is
# the single-byte fallback; UTF-16 variants are normally selected by BOM.
SUPPORTED_TEXT_ENCODINGS: Final[frozenset[str]] = frozenset({
    "utf-8",
    "latin-1",
    "utf-16-le",
    "utf-16-be",
})

# Encoding used for BOM-less text input when the caller gives no hint
DEFAULT_TEXT_ENCODING: Final[str] = (
    os.getenv("SUBCUE_DEFAULT_ENCODING", "utf-8").strip().lower() or "utf-8"
)

# Default output format for the CLI (json, jsonl, srt, vtt, txt)
DEFAULT_OUTPUT_FORMAT: Final[str] = os.getenv("SUBCUE_OUTPUT_FORMAT", "json").strip().lower()

# Logging configuration
LOG_LEVEL: Final[str] = os.getenv("SUBCUE_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Fractional positions used when a SubRip {\anN} alignment tag is present.
SUBRIP_START_FRACTION: Final[float] = 0.08
SUBRIP_MID_FRACTION: Final[float] = 0.5
SUBRIP_END_FRACTION: Final[float] = 1 - SUBRIP_START_FRACTION

# WebVTT cue box size when the settings box does not specify one
WEBVTT_DEFAULT_SIZE: Final[float] = 1.0

# Input format guessed from the file extension (CLI / detect_format)
FORMAT_BY_EXTENSION: Final[dict[str, str]] = {
    ".srt": "srt",
    ".mp4": "mp4vtt",
    ".m4s": "mp4vtt",
    ".m4t": "mp4vtt",
    ".vttc": "mp4vtt",
}
