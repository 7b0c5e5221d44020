"""Text rendering for progress lines and the final summary."""

from __future__ import annotations

from typing import List, Sequence

from .process_models import ProcessRecord, StopSummary

BANNER_WIDTH = 60
PORTS_PER_LINE = 8
VERBOSE_SAMPLE_SIZE = 5
VERBOSE_COMMAND_WIDTH = 80
CANDIDATE_COMMAND_WIDTH = 60
CLOSING_LINE = "\n🚀 You can now start your development server fresh!"

HELP_EPILOG = """\
Examples:
  stop-servers            # Stop all detected development servers
  stop-servers --dry-run  # Preview what would be stopped
  stop-servers -v         # Verbose output with detailed process info
"""


def truncate(text: str, width: int) -> str:
    """Shorten *text* to *width* characters, ending with '...' when cut."""
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_listening_listing(records: Sequence[ProcessRecord], verbose: bool) -> List[str]:
    lines = [f"Found {len(records)} listening processes"]
    if verbose:
        lines.extend(f"  - {record.process_name} ({record.pid}) on port {record.port}" for record in records)
        lines.append("")
    return lines


def format_user_listing(records: Sequence[ProcessRecord], verbose: bool) -> List[str]:
    header = f"Scanning {len(records)} user processes for development servers"
    if not verbose:
        return [header + "\n"]
    lines = [header, "Sample processes found:"]
    for record in records[:VERBOSE_SAMPLE_SIZE]:
        lines.append(f"  - {record.process_name} ({record.pid}): {truncate(record.command, VERBOSE_COMMAND_WIDTH)}")
    lines.append("")
    return lines


def format_candidate_header(count: int, dry_run: bool) -> str:
    if dry_run:
        return f"🔍 Would stop {count} development server(s):\n"
    return f"🎯 Detected {count} development server(s):\n"


def format_candidate(record: ProcessRecord) -> List[str]:
    port_info = f" on port {record.port}" if record.port is not None else ""
    return [
        f"   {record.process_name} (PID: {record.pid}){port_info}",
        f"   Command: {truncate(record.command, CANDIDATE_COMMAND_WIDTH)}",
    ]


def format_summary(summary: StopSummary) -> List[str]:
    """Render the counts banner that follows the per-process lines."""
    lines = ["=" * BANNER_WIDTH]
    if summary.dry_run:
        if summary.stopped:
            lines.append(f"🔍 Would have stopped {len(summary.stopped)} development server(s)")
            lines.append("💡 Run without --dry-run to actually stop these servers")
        return lines

    if summary.stopped:
        lines.append(f"✅ Successfully stopped {len(summary.stopped)} development server(s)")
    if summary.failed:
        lines.append(f"⚠️  Failed to stop {len(summary.failed)} process(es) (may have already exited)")
    return lines


def format_free_ports(free_ports: Sequence[int]) -> List[str]:
    lines = ["\n📝 Common development ports now available:"]
    if not free_ports:
        lines.append("   All common ports are still in use")
        return lines
    for start in range(0, len(free_ports), PORTS_PER_LINE):
        group = free_ports[start : start + PORTS_PER_LINE]
        lines.append("   " + ", ".join(f"{port}✓" for port in group))
    return lines


__all__ = [
    "CLOSING_LINE",
    "HELP_EPILOG",
    "format_candidate",
    "format_candidate_header",
    "format_free_ports",
    "format_listening_listing",
    "format_summary",
    "format_user_listing",
    "truncate",
]
