"""Decide whether a discovered process is a development server."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .dev_server_patterns import DEFAULT_PATTERNS, DevServerPatterns
from .process_models import ProcessRecord


def _contains_any(haystack: str, needles: Iterable[str]) -> bool:
    return any(needle in haystack for needle in needles)


def _contains_any_lower(haystack_lower: str, needles: Iterable[str]) -> bool:
    return any(needle.lower() in haystack_lower for needle in needles)


def is_excluded(record: ProcessRecord, patterns: DevServerPatterns = DEFAULT_PATTERNS) -> bool:
    """Return True when a deny rule matches *record*."""
    if _contains_any_lower(record.process_name.lower(), patterns.deny_process_names):
        return True
    if _contains_any(record.command, patterns.deny_path_patterns):
        return True
    return _contains_any(record.command, patterns.deny_command_patterns)


def _on_dev_port(record: ProcessRecord, patterns: DevServerPatterns) -> bool:
    port: Optional[int] = record.port
    if port is None or not patterns.min_port <= port <= patterns.max_port:
        return False
    if port in patterns.common_ports:
        return True
    if "node" in record.process_name.lower():
        return True
    return _contains_any(record.command.lower(), patterns.package_manager_keywords)


def is_development_server(record: ProcessRecord, patterns: DevServerPatterns = DEFAULT_PATTERNS) -> bool:
    """
    Classify *record* using the allow/deny tables.

    Deny rules are checked first and always win. Name and keyword rules
    ignore case; path, command and dependency-marker rules do not.
    """
    if is_excluded(record, patterns):
        return False

    command_lower = record.command.lower()
    if _contains_any_lower(record.process_name.lower(), patterns.dev_process_names):
        return True
    if _contains_any(command_lower, patterns.dev_command_keywords):
        return True
    if _contains_any(record.command, patterns.dev_dependency_markers):
        return True

    return _on_dev_port(record, patterns)


def filter_development_servers(
    records: Iterable[ProcessRecord], patterns: DevServerPatterns = DEFAULT_PATTERNS
) -> List[ProcessRecord]:
    """Return the records classified as development servers, preserving order."""
    return [record for record in records if is_development_server(record, patterns)]


__all__ = ["filter_development_servers", "is_development_server", "is_excluded"]
