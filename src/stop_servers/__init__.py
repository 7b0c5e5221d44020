"""Find and stop local development servers."""

from .process_classifier import is_development_server
from .process_models import ProcessRecord, StopSummary
from .server_stopper import ServerStopper, run_stop_servers, run_stop_servers_sync

__all__ = [
    "ProcessRecord",
    "ServerStopper",
    "StopSummary",
    "is_development_server",
    "run_stop_servers",
    "run_stop_servers_sync",
]
