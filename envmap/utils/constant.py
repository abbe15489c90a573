"""Project-wide constants."""

from __future__ import annotations

# Fixed summary for LoadError; callers inspect ``env_errors`` for details.
LOAD_ERROR_MESSAGE: str = "error(s) occurred loading environment variables"

# Values must round-trip through this codec strictly to count as valid text.
TEXT_ENCODING: str = "utf-8"
