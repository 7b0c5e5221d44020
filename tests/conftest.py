"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from stop_servers.process_models import ProcessRecord


class FakeEnumerator:
    """Fixed enumeration results for pipeline tests."""

    def __init__(self, listening: Iterable[ProcessRecord] = (), user: Iterable[ProcessRecord] = ()):
        self.listening = list(listening)
        self.user = list(user)
        self.calls: List[str] = []

    def list_listening_processes(self) -> List[ProcessRecord]:
        """Return the configured listening records."""
        self.calls.append("listening")
        return list(self.listening)

    def list_user_processes(self) -> List[ProcessRecord]:
        """Return the configured user records."""
        self.calls.append("user")
        return list(self.user)


class RecordingTerminator:
    """Terminator stub that records every pid it is asked to kill."""

    def __init__(self, failing_pids: Iterable[int] = ()):
        self.failing_pids = set(failing_pids)
        self.killed: List[int] = []

    def __call__(self, pid: int) -> bool:
        self.killed.append(pid)
        return pid not in self.failing_pids


class FakePortChecker:
    """Port checker reporting a fixed set of busy ports."""

    def __init__(self, busy_ports: Iterable[int] = ()):
        self.busy_ports = set(busy_ports)
        self.checked: List[int] = []

    def __call__(self, port: int) -> bool:
        self.checked.append(port)
        return port in self.busy_ports


@pytest.fixture
def make_record():
    """Provide a factory for process records with neutral defaults."""

    def factory(pid: int = 100, command: str = "ruby app.rb", process_name: str = "ruby", port=None) -> ProcessRecord:
        return ProcessRecord(pid=pid, command=command, process_name=process_name, port=port)

    return factory


@pytest.fixture
def recording_terminator() -> RecordingTerminator:
    return RecordingTerminator()


@pytest.fixture
def fake_port_checker() -> FakePortChecker:
    return FakePortChecker()


@pytest.fixture
def console_lines() -> List[str]:
    """Collect console output emitted by the stopper."""
    return []


@pytest.fixture
def enumerator_factory():
    """Provide the fake enumerator class for building fixtures."""
    return FakeEnumerator


@pytest.fixture
def terminator_factory():
    """Provide the recording terminator class for building fixtures."""
    return RecordingTerminator


@pytest.fixture
def port_checker_factory():
    """Provide the fake port checker class for building fixtures."""
    return FakePortChecker
