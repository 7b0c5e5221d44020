"""Shared configuration helpers."""

from .runtime import current_username, env_str

__all__ = [
    "current_username",
    "env_str",
]
