"""Tests for the discovery and termination pipeline."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from stop_servers.dev_server_patterns import COMMON_DEV_PORTS
from stop_servers.server_stopper import ServerStopper, build_default_stopper, run_stop_servers_sync


@pytest.fixture
def dev_fixture(make_record, enumerator_factory):
    """Two development servers plus one shell that must be ignored."""
    listening = [make_record(pid=100, port=3000, process_name="node", command="node server.js")]
    user = [
        make_record(pid=100, process_name="node", command="node server.js"),
        make_record(pid=200, process_name="vite", command="/repo/node_modules/.bin/vite"),
        make_record(pid=300, process_name="zsh", command="-zsh"),
    ]
    return enumerator_factory(listening=listening, user=user)


def _stopper(enumerator, terminator, port_checker, lines, **kwargs):
    return ServerStopper(
        enumerator,
        terminator=terminator,
        port_checker=port_checker,
        console_output_func=lines.append,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_dry_run_never_terminates(dev_fixture, recording_terminator, fake_port_checker, console_lines) -> None:
    stopper = _stopper(dev_fixture, recording_terminator, fake_port_checker, console_lines)

    summary = await stopper.run(dry_run=True)

    assert recording_terminator.killed == []
    assert [record.pid for record in summary.stopped] == [100, 200]
    assert summary.failed == []
    assert any("Would stop this process" in line for line in console_lines)


@pytest.mark.asyncio
async def test_terminates_each_candidate_once(dev_fixture, recording_terminator, fake_port_checker, console_lines) -> None:
    stopper = _stopper(dev_fixture, recording_terminator, fake_port_checker, console_lines)

    summary = await stopper.run()

    assert recording_terminator.killed == [100, 200]
    assert summary.found == 2
    assert summary.candidates[0].port == 3000


@pytest.mark.asyncio
async def test_failed_termination_is_counted(dev_fixture, terminator_factory, fake_port_checker, console_lines) -> None:
    terminator = terminator_factory(failing_pids=[200])
    stopper = _stopper(dev_fixture, terminator, fake_port_checker, console_lines)

    summary = await stopper.run()

    assert [record.pid for record in summary.stopped] == [100]
    assert [record.pid for record in summary.failed] == [200]
    assert any("Failed to stop 1 process(es)" in line for line in console_lines)


@pytest.mark.asyncio
async def test_empty_result_skips_termination_and_port_check(
    make_record, enumerator_factory, recording_terminator, fake_port_checker, console_lines
) -> None:
    enumerator = enumerator_factory(user=[make_record(pid=5, process_name="bash", command="bash")])
    stopper = _stopper(enumerator, recording_terminator, fake_port_checker, console_lines)

    summary = await stopper.run()

    assert summary.found == 0
    assert recording_terminator.killed == []
    assert fake_port_checker.checked == []
    assert any("No development servers were detected" in line for line in console_lines)


@pytest.mark.asyncio
async def test_reports_free_common_ports(dev_fixture, recording_terminator, port_checker_factory, console_lines) -> None:
    port_checker = port_checker_factory(busy_ports=[3000, 9000])
    stopper = _stopper(dev_fixture, recording_terminator, port_checker, console_lines)

    summary = await stopper.run()

    assert sorted(port_checker.checked) == sorted(COMMON_DEV_PORTS)
    assert 3000 not in summary.free_ports
    assert 3001 in summary.free_ports
    assert summary.free_ports == [port for port in COMMON_DEV_PORTS if port not in (3000, 9000)]


@pytest.mark.asyncio
async def test_excludes_own_pid(dev_fixture, recording_terminator, fake_port_checker, console_lines) -> None:
    stopper = _stopper(dev_fixture, recording_terminator, fake_port_checker, console_lines, exclude_pid=200)

    await stopper.run()

    assert recording_terminator.killed == [100]


@pytest.mark.asyncio
async def test_runs_both_enumerations(dev_fixture, recording_terminator, fake_port_checker, console_lines) -> None:
    stopper = _stopper(dev_fixture, recording_terminator, fake_port_checker, console_lines)

    await stopper.run(verbose=True)

    assert sorted(dev_fixture.calls) == ["listening", "user"]
    assert "Sample processes found:" in console_lines


@pytest.mark.asyncio
async def test_classification_does_not_mutate_records(dev_fixture, recording_terminator, fake_port_checker, console_lines) -> None:
    stopper = _stopper(dev_fixture, recording_terminator, fake_port_checker, console_lines)

    first = await stopper.run(dry_run=True)
    second = await stopper.run(dry_run=True)

    assert first.candidates == second.candidates


def test_build_default_stopper_uses_current_user(monkeypatch) -> None:
    monkeypatch.setenv("USER", "alice")

    stopper = build_default_stopper()

    assert stopper.enumerator.username == "alice"
    assert stopper.exclude_pid is not None


@pytest.mark.asyncio
async def test_missing_login_name_still_stops_listening_servers(
    monkeypatch, make_record, recording_terminator, fake_port_checker, console_lines
) -> None:
    monkeypatch.delenv("USER", raising=False)
    monkeypatch.delenv("USERNAME", raising=False)
    listener = make_record(pid=100, port=3000, process_name="node", command="node server.js")

    stopper = build_default_stopper(
        terminator=recording_terminator,
        port_checker=fake_port_checker,
        console_output_func=console_lines.append,
    )
    with patch("stop_servers.process_discovery.list_listening_processes", return_value=[listener]):
        with patch("stop_servers.process_discovery.list_user_processes") as user_scan:
            summary = await stopper.run()

    user_scan.assert_not_called()
    assert stopper.enumerator.username is None
    assert recording_terminator.killed == [100]
    assert summary.stopped == [listener]


def test_run_sync_rejects_running_loop(monkeypatch) -> None:
    import asyncio
    from types import SimpleNamespace

    loop = SimpleNamespace(is_running=lambda: True)
    monkeypatch.setattr(asyncio, "get_running_loop", lambda: loop)

    with pytest.raises(RuntimeError):
        run_stop_servers_sync()


def test_run_sync_executes_pipeline(dev_fixture, recording_terminator, fake_port_checker) -> None:
    stopper = ServerStopper(
        dev_fixture,
        terminator=recording_terminator,
        port_checker=fake_port_checker,
        console_output_func=lambda message: None,
    )
    with patch("stop_servers.server_stopper.build_default_stopper", return_value=stopper):
        summary = run_stop_servers_sync(dry_run=True)

    assert summary.found == 2
    assert recording_terminator.killed == []
