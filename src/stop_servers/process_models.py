from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class ProcessRecord:
    """A process discovered during a single run."""

    pid: int
    command: str
    process_name: str
    port: Optional[int] = None


@dataclass
class StopSummary:
    """Outcome of one discovery and termination pass."""

    dry_run: bool
    candidates: List[ProcessRecord] = field(default_factory=list)
    stopped: List[ProcessRecord] = field(default_factory=list)
    failed: List[ProcessRecord] = field(default_factory=list)
    free_ports: List[int] = field(default_factory=list)

    @property
    def found(self) -> int:
        return len(self.candidates)


class ProcessEnumerator(Protocol):
    """Source of raw process records."""

    def list_listening_processes(self) -> List[ProcessRecord]: ...

    def list_user_processes(self) -> List[ProcessRecord]: ...


class ProcessTerminatorFn(Protocol):
    def __call__(self, pid: int) -> bool: ...


class PortChecker(Protocol):
    def __call__(self, port: int) -> bool: ...

