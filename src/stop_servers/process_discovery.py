"""Process discovery backed by psutil."""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence, Tuple

import psutil

from .process_models import ProcessRecord

logger = logging.getLogger(__name__)

_UNKNOWN_NAME = "unknown"


def _join_cmdline(cmdline: Optional[Sequence[str]], name: str) -> str:
    """Join argv into a single command string, falling back to the process name."""
    if cmdline:
        return " ".join(str(arg) for arg in cmdline)
    return name


def _name_from_cmdline(cmdline: Optional[Sequence[str]], name: Optional[str]) -> str:
    if cmdline:
        executable = os.path.basename(str(cmdline[0]))
        if executable:
            return executable
    if name:
        return str(name)
    return _UNKNOWN_NAME


def _listening_from_system() -> List[Tuple[Optional[int], Optional[int]]]:
    return [
        (conn.pid, conn.laddr.port if conn.laddr else None)
        for conn in psutil.net_connections(kind="inet")
        if conn.status == psutil.CONN_LISTEN
    ]


def _listening_from_processes() -> List[Tuple[Optional[int], Optional[int]]]:
    """Collect listeners process by process; only readable processes are covered."""
    listeners: List[Tuple[Optional[int], Optional[int]]] = []
    for proc in psutil.process_iter(["pid"]):
        try:
            connections = proc.net_connections(kind="inet")
        except (psutil.NoSuchProcess, psutil.AccessDenied):  # policy_guard: allow-silent-handler
            continue
        for conn in connections:
            if conn.status == psutil.CONN_LISTEN:
                listeners.append((proc.pid, conn.laddr.port if conn.laddr else None))
    return listeners


def _listening_sockets() -> List[Tuple[Optional[int], Optional[int]]]:
    """Return ``(pid, port)`` pairs for every listening inet socket."""
    try:
        return _listening_from_system()
    except psutil.AccessDenied:  # policy_guard: allow-silent-handler
        # macOS: system-wide net_connections() requires root
        logger.debug("System-wide socket listing denied; scanning processes individually")
        return _listening_from_processes()


def _describe_pid(pid: int, port: Optional[int]) -> Optional[ProcessRecord]:
    """Resolve the command line for a listening pid, or None if it vanished."""
    try:
        proc = psutil.Process(pid)
        name = proc.name() or _UNKNOWN_NAME
        command = _join_cmdline(proc.cmdline(), name)
    except (psutil.NoSuchProcess, psutil.AccessDenied) as exc:  # policy_guard: allow-silent-handler
        logger.debug("Skipping listening process %s: %s", pid, exc)
        return None
    return ProcessRecord(pid=pid, port=port, command=command, process_name=name)


def list_listening_processes() -> List[ProcessRecord]:
    """
    Return one record per listening inet socket whose owner could be resolved.

    A pid bound to several addresses yields several records. Enumeration
    failures return an empty list.
    """
    try:
        sockets = _listening_sockets()
    except (psutil.Error, OSError) as exc:  # policy_guard: allow-silent-handler
        logger.debug("Listening socket enumeration failed: %s", exc)
        return []

    records: List[ProcessRecord] = []
    for pid, port in sockets:
        if pid is None:
            continue
        record = _describe_pid(pid, port)
        if record is not None:
            records.append(record)
    return records


def list_user_processes(username: str) -> List[ProcessRecord]:
    """Return portless records for every process owned by *username*."""
    records: List[ProcessRecord] = []
    try:
        for proc in psutil.process_iter(["pid", "name", "cmdline", "username"]):
            info = proc.info
            if info.get("username") != username:
                continue
            cmdline = info.get("cmdline")
            name = _name_from_cmdline(cmdline, info.get("name"))
            records.append(
                ProcessRecord(
                    pid=info["pid"],
                    command=_join_cmdline(cmdline, name),
                    process_name=name,
                )
            )
    except (psutil.Error, OSError) as exc:  # policy_guard: allow-silent-handler
        logger.debug("User process enumeration failed: %s", exc)
        return []
    return records


def is_port_in_use(port: int) -> bool:
    """Return True when any socket is currently listening on *port*."""
    try:
        sockets = _listening_sockets()
    except (psutil.Error, OSError) as exc:  # policy_guard: allow-silent-handler
        logger.debug("Port check for %s failed: %s", port, exc)
        return False
    return any(listening_port == port for _, listening_port in sockets)


class PsutilProcessEnumerator:
    """Enumerate listening and user-owned processes on the local host."""

    def __init__(self, username: Optional[str]):
        self.username = username

    def list_listening_processes(self) -> List[ProcessRecord]:
        return list_listening_processes()

    def list_user_processes(self) -> List[ProcessRecord]:
        if self.username is None:
            logger.warning("No login name in USER or USERNAME; skipping the user process scan")
            return []
        return list_user_processes(self.username)


__all__ = [
    "PsutilProcessEnumerator",
    "is_port_in_use",
    "list_listening_processes",
    "list_user_processes",
]
