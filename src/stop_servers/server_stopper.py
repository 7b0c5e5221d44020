"""
Development Server Stopper

Discovers local development servers, stops them (or previews what would be
stopped), and reports which common development ports are free afterwards.

Usage:
    from stop_servers.server_stopper import run_stop_servers_sync

    summary = run_stop_servers_sync(dry_run=True)
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Callable, List, Optional

from .config import current_username
from .dev_server_patterns import DEFAULT_PATTERNS, DevServerPatterns
from .process_aggregator import filter_processes_by_pid, merge_by_pid
from .process_classifier import filter_development_servers
from .process_discovery import PsutilProcessEnumerator, is_port_in_use
from .process_models import PortChecker, ProcessEnumerator, ProcessRecord, ProcessTerminatorFn, StopSummary
from .process_terminator import terminate_process
from .report_formatter import (
    CLOSING_LINE,
    format_candidate,
    format_candidate_header,
    format_free_ports,
    format_listening_listing,
    format_summary,
    format_user_listing,
)

logger = logging.getLogger(__name__)


def _console(message: str) -> None:
    print(message)


class ServerStopper:
    """Runs discovery, classification and termination for one invocation."""

    def __init__(
        self,
        enumerator: ProcessEnumerator,
        *,
        terminator: ProcessTerminatorFn = terminate_process,
        port_checker: PortChecker = is_port_in_use,
        patterns: DevServerPatterns = DEFAULT_PATTERNS,
        console_output_func: Callable[[str], Any] = _console,
        exclude_pid: Optional[int] = None,
    ):
        self.enumerator = enumerator
        self.terminator = terminator
        self.port_checker = port_checker
        self.patterns = patterns
        self.console_output_func = console_output_func
        self.exclude_pid = exclude_pid

    def _emit(self, *lines: str) -> None:
        for line in lines:
            self.console_output_func(line)

    async def run(self, *, dry_run: bool = False, verbose: bool = False) -> StopSummary:
        """Execute a single pass and return what was found and stopped."""
        summary = StopSummary(dry_run=dry_run)
        self._emit("🔍 Discovering all running servers dynamically...\n")

        listening, user_processes = await asyncio.gather(
            asyncio.to_thread(self.enumerator.list_listening_processes),
            asyncio.to_thread(self.enumerator.list_user_processes),
        )
        self._emit(*format_listening_listing(listening, verbose))
        self._emit(*format_user_listing(user_processes, verbose))

        aggregate = filter_processes_by_pid(merge_by_pid(listening, user_processes), self.exclude_pid)
        summary.candidates = filter_development_servers(aggregate, self.patterns)
        logger.debug(
            "Classified %d of %d unique processes as development servers",
            len(summary.candidates),
            len(aggregate),
        )

        if not summary.candidates:
            self._emit("ℹ️  No development servers were detected", CLOSING_LINE)
            return summary

        self._emit(format_candidate_header(summary.found, dry_run))
        for record in summary.candidates:
            self._act_on(record, summary)

        self._emit(*format_summary(summary))
        summary.free_ports = await self._free_common_ports()
        self._emit(*format_free_ports(summary.free_ports), CLOSING_LINE)
        return summary

    def _act_on(self, record: ProcessRecord, summary: StopSummary) -> None:
        self._emit(*format_candidate(record))
        if summary.dry_run:
            self._emit("   🔍 Would stop this process\n")
            summary.stopped.append(record)
            return

        if self.terminator(record.pid):
            self._emit("   ✓ Successfully stopped\n")
            summary.stopped.append(record)
        else:
            self._emit("   ❌ Failed to stop (process may have already exited)\n")
            summary.failed.append(record)

    async def _free_common_ports(self) -> List[int]:
        ports = list(self.patterns.common_ports)
        in_use = await asyncio.gather(*(asyncio.to_thread(self.port_checker, port) for port in ports))
        return [port for port, busy in zip(ports, in_use) if not busy]


def build_default_stopper(**kwargs: Any) -> ServerStopper:
    """Create a stopper wired to the local host for the current user."""
    enumerator = PsutilProcessEnumerator(current_username())
    kwargs.setdefault("exclude_pid", os.getpid())
    return ServerStopper(enumerator, **kwargs)


async def run_stop_servers(*, dry_run: bool = False, verbose: bool = False) -> StopSummary:
    return await build_default_stopper().run(dry_run=dry_run, verbose=verbose)


def run_stop_servers_sync(*, dry_run: bool = False, verbose: bool = False) -> StopSummary:
    """Synchronously run one pass.

    Raises:
        RuntimeError: If called while an event loop is already running.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None and loop.is_running():
        raise RuntimeError("run_stop_servers_sync cannot run inside an active event loop. " "Use run_stop_servers instead.")

    return asyncio.run(run_stop_servers(dry_run=dry_run, verbose=verbose))


__all__ = [
    "ServerStopper",
    "build_default_stopper",
    "run_stop_servers",
    "run_stop_servers_sync",
]
