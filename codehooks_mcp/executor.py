"""
Command execution for the coho CLI.

Security features:
- Argument vectors only (no shell, no string interpolation)
- Admin token appended here and nowhere else
- Token redacted from every string that leaves this module
- Execution timeout
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from pathlib import Path
import shlex

from codehooks_mcp.context import CredentialStore
from codehooks_mcp.errors import CommandFailedError

logger = logging.getLogger("codehooks-mcp.exec")

REDACTION_MARKER = "***"
TOKEN_FLAG = "--admintoken"
DEFAULT_TIMEOUT = 120


def redact(text: str, secret: str) -> str:
    """Replace every literal occurrence of ``secret`` in ``text``."""
    if not text or not secret:
        return text
    return text.replace(secret, REDACTION_MARKER)


@dataclass
class ExecResult:
    """Result from a completed CLI call. All fields are redacted."""

    stdout: str
    stderr: str
    exit_code: int
    command: str

    @property
    def output(self) -> str:
        return self.stdout or self.stderr


class CommandExecutor:
    """Runs coho (and auxiliary programs) as subprocesses."""

    def __init__(
        self,
        store: CredentialStore,
        binary: str = "coho",
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.store = store
        self.binary = binary
        self.timeout = timeout

    async def run(
        self,
        args: list[str],
        *,
        cwd: Path | str | None = None,
        timeout: int | None = None,
    ) -> ExecResult:
        """Run ``coho <args> --admintoken <token>``.

        Raises:
            CommandFailedError: non-zero exit, spawn failure or timeout
        """
        token = self.store.secret
        argv = [self.binary, *args, TOKEN_FLAG, token]
        return await self._execute(argv, secret=token, cwd=cwd, timeout=timeout)

    async def run_program(
        self,
        argv: list[str],
        *,
        cwd: Path | str | None = None,
        timeout: int | None = None,
    ) -> ExecResult:
        """Run an auxiliary program (e.g. ``npm install``) without the token."""
        return await self._execute(list(argv), secret=self.store.secret, cwd=cwd, timeout=timeout)

    async def version(self) -> str:
        result = await self._execute(
            [self.binary, "--version"], secret=self.store.secret, timeout=30
        )
        return result.output.strip()

    async def _execute(
        self,
        argv: list[str],
        *,
        secret: str,
        cwd: Path | str | None = None,
        timeout: int | None = None,
    ) -> ExecResult:
        timeout = timeout or self.timeout
        # Redact per argument: quoting may split a token containing quotes
        command = shlex.join(redact(arg, secret) for arg in argv)
        logger.info(f"Executing command: {command}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd) if cwd is not None else None,
            )
        except (OSError, ValueError) as e:
            message = redact(f"Failed to start {argv[0]}: {e}", secret)
            logger.error(f"Command failed: {message}")
            raise CommandFailedError(message, command=command) from None

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=timeout
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            message = f"Command timed out after {timeout}s"
            logger.error(f"{message}: {command}")
            raise CommandFailedError(message, command=command) from None
        except asyncio.CancelledError:
            logger.warning(f"Command cancelled, killing process: {command}")
            if proc.returncode is None:
                proc.kill()
            await proc.wait()
            raise

        stdout = redact(stdout_bytes.decode(errors="replace"), secret)
        stderr = redact(stderr_bytes.decode(errors="replace"), secret)
        exit_code = proc.returncode if proc.returncode is not None else -1

        if exit_code != 0:
            message = f"Command failed with exit code {exit_code}: {command}"
            logger.error(message)
            if stdout:
                logger.error(f"Stdout: {stdout}")
            if stderr:
                logger.error(f"Stderr: {stderr}")
            raise CommandFailedError(
                message,
                command=command,
                stdout=stdout,
                stderr=stderr,
                exit_code=exit_code,
            )

        if stderr:
            logger.debug(f"Command output to stderr: {stderr}")
        logger.info("Command successful")
        return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code, command=command)
