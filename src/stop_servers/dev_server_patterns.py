"""Allow and deny tables used to recognise development servers.

Name and keyword entries are compared case-insensitively; path and command
entries are compared case-sensitively against the raw command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Registered/user port range (system ports below 1024 are never targeted)
MIN_DEV_PORT = 1024
MAX_DEV_PORT = 65535

COMMON_DEV_PORTS: Tuple[int, ...] = (
    3000,
    3001,
    3002,
    3003,
    4000,
    4200,
    5000,
    5173,
    5174,
    8000,
    8080,
    8081,
    8082,
    9000,
)


@dataclass(frozen=True)
class DevServerPatterns:
    """Classification tables, grouped by the rule that consumes them."""

    deny_process_names: Tuple[str, ...]
    deny_path_patterns: Tuple[str, ...]
    deny_command_patterns: Tuple[str, ...]
    dev_process_names: Tuple[str, ...]
    dev_command_keywords: Tuple[str, ...]
    dev_dependency_markers: Tuple[str, ...]
    package_manager_keywords: Tuple[str, ...]
    common_ports: Tuple[int, ...] = COMMON_DEV_PORTS
    min_port: int = MIN_DEV_PORT
    max_port: int = MAX_DEV_PORT


DEFAULT_PATTERNS = DevServerPatterns(
    # System daemons, editors, browsers, shells and container runtimes
    deny_process_names=(
        "rapportd",
        "logioptio",
        "Parallels",
        "Spotify",
        "Framer",
        "ControlCe",
        "findmydevice",
        "amsondevicestoraged",
        "Cursor",
        "Chrome",
        "Safari",
        "typingsInstaller",
        "jsonServerMain",
        "cssServerMain",
        "markdown-language-features",
        "zsh",
        "bash",
        "sh",
        "fish",
        "docker",
    ),
    deny_path_patterns=(
        "/System/",
        "/usr/libexec/",
        "/Library/",
        "/Applications/",
        "Cursor Helper",
        "Chrome Helper",
        "Safari Helper",
    ),
    # This tool, shell snapshots, docker event streams and language servers
    deny_command_patterns=(
        "stop-servers.ts",
        "stop-servers",
        "stop_servers",
        "shell-snapshots",
        "docker events",
        "tsserver",
        "typescript",
        ".claude/",
        ".npm/",
        "_npx/",
    ),
    dev_process_names=(
        "next",
        "vite",
        "webpack-dev-server",
        "react-scripts",
        "parcel",
        "snowpack",
        "rollup",
        "nuxt",
        "gatsby",
        "svelte",
        "astro",
    ),
    dev_command_keywords=(
        "dev",
        "serve",
        "start",
        "preview",
        "build --watch",
    ),
    dev_dependency_markers=(
        "node_modules/.bin/",
        "@vue/cli-service",
        "ng serve",
    ),
    package_manager_keywords=(
        "npm",
        "yarn",
        "pnpm",
    ),
)


__all__ = [
    "COMMON_DEV_PORTS",
    "DEFAULT_PATTERNS",
    "DevServerPatterns",
    "MAX_DEV_PORT",
    "MIN_DEV_PORT",
]
