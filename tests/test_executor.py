"""Tests for coho command execution and token redaction."""

import asyncio
import logging
import os

import pytest

from codehooks_mcp.context import CredentialStore, Credentials
from codehooks_mcp.errors import CommandFailedError
from codehooks_mcp.executor import CommandExecutor, redact

TOKEN = "tkn_abc123"


def test_redact_replaces_every_occurrence():
    assert redact(f"a {TOKEN} b {TOKEN}", TOKEN) == "a *** b ***"


def test_redact_without_secret_is_identity():
    assert redact("nothing to hide", "") == "nothing to hide"
    assert redact("", TOKEN) == ""


@pytest.mark.asyncio
async def test_run_appends_token_last(executor, fake_coho):
    await executor.run(["kv", "--key", "a"])

    assert fake_coho.argv().endswith(f"--admintoken {TOKEN}")
    assert fake_coho.argv().startswith("kv --key a")


@pytest.mark.asyncio
async def test_run_redacts_token_from_output(executor):
    result = await executor.run(["query"])

    assert TOKEN not in result.stdout
    assert "--admintoken ***" in result.stdout
    assert TOKEN not in result.command


@pytest.mark.asyncio
async def test_run_program_does_not_append_token(executor, fake_coho):
    await executor.run_program([str(fake_coho.path), "install"])

    assert fake_coho.argv() == "install"


@pytest.mark.asyncio
async def test_nonzero_exit_raises_with_redacted_streams(executor, fake_coho):
    fake_coho.respond(stderr=f"bad token {TOKEN}", exit_code=3)

    with pytest.raises(CommandFailedError) as exc_info:
        await executor.run(["query"])

    err = exc_info.value
    assert err.exit_code == 3
    assert "exit code 3" in str(err)
    assert err.stderr.strip() == "bad token ***"
    assert TOKEN not in err.details()
    assert TOKEN not in err.stdout


@pytest.mark.asyncio
async def test_output_falls_back_to_stderr(executor, fake_coho):
    fake_coho.respond(stderr="only on stderr", quiet=True)

    result = await executor.run(["info"])

    assert result.stdout == ""
    assert result.output.strip() == "only on stderr"


@pytest.mark.asyncio
async def test_missing_binary_raises_command_failed(store, tmp_path):
    executor = CommandExecutor(store, str(tmp_path / "no-such-coho"))

    with pytest.raises(CommandFailedError, match="Failed to start"):
        await executor.run(["query"])


@pytest.mark.asyncio
async def test_timeout_kills_process(store, fake_coho):
    fake_coho.respond(sleep=5)
    executor = CommandExecutor(store, str(fake_coho.path), timeout=1)

    with pytest.raises(CommandFailedError, match="timed out after 1s"):
        await executor.run(["log", "--follow"])


@pytest.mark.asyncio
async def test_logs_never_contain_token(executor, fake_coho, caplog):
    caplog.set_level(logging.DEBUG)
    fake_coho.respond(stderr=f"warning for {TOKEN}", exit_code=1)

    with pytest.raises(CommandFailedError):
        await executor.run(["query"])

    assert caplog.records
    assert all(TOKEN not in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_version_runs_without_token(fake_coho):
    executor = CommandExecutor(CredentialStore(Credentials()), str(fake_coho.path))

    assert await executor.version() == "--version"
    assert fake_coho.argv() == "--version"


@pytest.mark.asyncio
async def test_cancelled_call_kills_process(executor, fake_coho, tmp_path):
    pidfile = tmp_path / "coho.pid"
    fake_coho.monkeypatch.setenv("FAKE_COHO_PIDFILE", str(pidfile))
    fake_coho.respond(sleep=30)

    task = asyncio.create_task(executor.run(["log", "--follow"]))
    for _ in range(100):
        if pidfile.exists() and pidfile.read_text().endswith("\n"):
            break
        await asyncio.sleep(0.05)
    pid = int(pidfile.read_text())

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)


@pytest.mark.asyncio
async def test_unspawnable_argument_raises_command_failed(executor, fake_coho):
    with pytest.raises(CommandFailedError, match="Failed to start"):
        await executor.run(["query", "--query", "a\x00b"])

    assert fake_coho.calls() == []
