from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os
from typing import Sequence

_USERNAME_VARIABLES = ("USER", "USERNAME")


def env_str(name: str, or_value: str | None = None) -> str | None:
    """Fetch a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return or_value
    return value.strip()


def current_username(variables: Sequence[str] = _USERNAME_VARIABLES) -> str | None:
    """Return the login name of the invoking user, or None when it is not set.

    The first non-blank variable wins, so ``USER`` takes precedence over
    ``USERNAME``.
    """
    for name in variables:
        value = env_str(name)
        if value is not None:
            return value
    return None


__all__ = ["current_username", "env_str"]
