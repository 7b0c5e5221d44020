"""Merge enumeration results into one record per pid."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .process_models import ProcessRecord


def merge_by_pid(*sources: Iterable[ProcessRecord]) -> List[ProcessRecord]:
    """
    Combine record collections keyed by pid; the first record seen for a pid wins.

    Pass the listening-process collection first so that a port-bearing record
    is never replaced by a portless one for the same pid.
    """
    unique: Dict[int, ProcessRecord] = {}
    for source in sources:
        for record in source:
            if record.pid not in unique:
                unique[record.pid] = record
    return list(unique.values())


def filter_processes_by_pid(records: Iterable[ProcessRecord], exclude_pid: Optional[int]) -> List[ProcessRecord]:
    """Return all records except those matching the excluded pid."""
    if exclude_pid is None:
        return list(records)
    return [record for record in records if record.pid != exclude_pid]


__all__ = ["filter_processes_by_pid", "merge_by_pid"]
