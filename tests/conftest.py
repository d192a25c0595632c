from dataclasses import dataclass
import os
from pathlib import Path
import stat

import pytest

from codehooks_mcp.context import CredentialStore, Credentials
from codehooks_mcp.dispatcher import Dispatcher
from codehooks_mcp.executor import CommandExecutor
from codehooks_mcp.staging import StagingManager
from codehooks_mcp.tools import build_registry

TOKEN = "tkn_abc123"
PROJECT = "proj1"

# Logs "<cwd>\t<argv>" per call, then answers as configured by FAKE_COHO_* env vars.
FAKE_COHO = """#!/bin/sh
printf '%s\\t%s\\n' "$PWD" "$*" >> "$FAKE_COHO_LOG"
if [ -n "$FAKE_COHO_PIDFILE" ]; then
  echo $$ > "$FAKE_COHO_PIDFILE"
fi
if [ -n "$FAKE_COHO_SLEEP" ]; then
  exec sleep "$FAKE_COHO_SLEEP"
fi
if [ -n "$FAKE_COHO_STDERR" ]; then
  printf '%s\\n' "$FAKE_COHO_STDERR" >&2
fi
if [ -n "$FAKE_COHO_STDOUT" ]; then
  printf '%s' "$FAKE_COHO_STDOUT"
elif [ -z "$FAKE_COHO_QUIET" ]; then
  printf '%s\\n' "$*"
fi
exit "${FAKE_COHO_EXIT:-0}"
"""

CODEHOOKS_ENV = (
    "CODEHOOKS_PROJECT_NAME",
    "CODEHOOKS_PROJECT_ID",
    "CODEHOOKS_SPACE",
    "CODEHOOKS_ADMIN_TOKEN",
    "CODEHOOKS_CLI",
    "CODEHOOKS_MCP_CONFIG",
    "CODEHOOKS_MCP_LOG_LEVEL",
    "CODEHOOKS_MCP_LOG_FORMAT",
    "CODEHOOKS_MCP_TIMEOUT",
    "CODEHOOKS_MCP_SCRATCH_DIR",
)


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with no CODEHOOKS_* variables.
    """
    monkeypatch.chdir(tmp_path)
    for name in CODEHOOKS_ENV:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@dataclass
class FakeCoho:
    """Handle on the fake coho script: configure replies, read recorded calls."""

    path: Path
    log: Path
    monkeypatch: pytest.MonkeyPatch

    def respond(
        self,
        stdout: str | None = None,
        stderr: str | None = None,
        exit_code: int = 0,
        sleep: int | None = None,
        quiet: bool = False,
    ) -> None:
        for name, value in (
            ("FAKE_COHO_STDOUT", stdout),
            ("FAKE_COHO_STDERR", stderr),
            ("FAKE_COHO_SLEEP", None if sleep is None else str(sleep)),
            ("FAKE_COHO_QUIET", "1" if quiet else None),
        ):
            if value is None:
                self.monkeypatch.delenv(name, raising=False)
            else:
                self.monkeypatch.setenv(name, value)
        self.monkeypatch.setenv("FAKE_COHO_EXIT", str(exit_code))

    def calls(self) -> list[tuple[str, str]]:
        """Recorded ``(cwd, argv)`` pairs, oldest first."""
        if not self.log.exists():
            return []
        return [
            tuple(line.split("\t", 1))
            for line in self.log.read_text().splitlines()
            if line
        ]

    def argv(self, index: int = -1) -> str:
        return self.calls()[index][1]


@pytest.fixture
def fake_coho(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeCoho:
    if os.name == "nt":
        pytest.skip("fake coho is a POSIX shell script")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    path = bin_dir / "coho"
    path.write_text(FAKE_COHO)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    log = tmp_path / "coho-calls.log"
    monkeypatch.setenv("FAKE_COHO_LOG", str(log))
    fake = FakeCoho(path=path, log=log, monkeypatch=monkeypatch)
    fake.respond()
    return fake


@pytest.fixture
def store() -> CredentialStore:
    return CredentialStore(Credentials(project=PROJECT, space="dev", admin_token=TOKEN))


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    return tmp_path / "scratch"


@pytest.fixture
def executor(store: CredentialStore, fake_coho: FakeCoho) -> CommandExecutor:
    return CommandExecutor(store, str(fake_coho.path), timeout=10)


@pytest.fixture
def dispatcher(store: CredentialStore, executor: CommandExecutor, scratch: Path) -> Dispatcher:
    return Dispatcher(
        build_registry(),
        store,
        executor,
        StagingManager(scratch),
        install_command=["true"],
        install_timeout=10,
    )
