"""Centralized configuration loading for the Ariadne storage adapter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from ariadne_storage.cms.client import make_path

VISIBILITY_CHOICES = ("public", "private")


@dataclass(frozen=True)
class Settings:
    """Immutable container for environment-driven settings."""

    root_path: str = "/"
    default_mimetype: str = "text/turtle"
    default_visibility: str = "public"
    # Deepest directory level walked by recursive listings
    list_max_depth: int = 32


def _get_positive_int(key: str, value: str, min_value: int = 1) -> int:
    """Parse and validate a positive integer from an environment variable.

    Args:
        key: Environment variable name (for error messages)
        value: Raw string value from os.environ
        min_value: Minimum allowed value (default: 1)

    Returns:
        Validated positive integer

    Raises:
        ValueError: If value is not an integer or below min_value
    """
    try:
        parsed = int(value)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {value}") from e

    if parsed < min_value:
        raise ValueError(f"{key} must be >= {min_value}, got: {parsed}")

    return parsed


def _get_choice(key: str, value: str, choices: tuple[str, ...]) -> str:
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ValueError(f"{key} must be one of {', '.join(choices)}, got: {value}")
    return normalized


def load_settings() -> Settings:
    """Build settings from the current environment without caching."""

    mimetype = os.environ.get("ARIADNE_DEFAULT_MIMETYPE", "text/turtle").strip()
    if not mimetype:
        raise ValueError("ARIADNE_DEFAULT_MIMETYPE must not be empty")

    return Settings(
        root_path=make_path(os.environ.get("ARIADNE_ROOT_PATH", "/")),
        default_mimetype=mimetype,
        default_visibility=_get_choice(
            "ARIADNE_DEFAULT_VISIBILITY",
            os.environ.get("ARIADNE_DEFAULT_VISIBILITY", "public"),
            VISIBILITY_CHOICES,
        ),
        list_max_depth=_get_positive_int(
            "ARIADNE_LIST_MAX_DEPTH", os.environ.get("ARIADNE_LIST_MAX_DEPTH", "32"), min_value=1
        ),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return load_settings()
