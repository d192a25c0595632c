"""
Temporary staging of caller-supplied files for the coho CLI.

Every staged directory is unique per call and lives under the scratch root.
Cleanup runs on every exit path; the only exception is a deploy that opts in
with ``preserve_on_failure`` and then fails in the CLI.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
import json
import logging
from pathlib import Path, PurePosixPath
import shutil
import uuid

from codehooks_mcp.errors import CommandFailedError, StagingError

logger = logging.getLogger("codehooks-mcp.staging")

MANIFEST_NAME = "package.json"


@dataclass(frozen=True)
class StagedFile:
    """One file to materialize, path relative to the staging directory."""

    path: str
    content: str | bytes


def default_manifest(name: str, main: str = "index") -> dict:
    """Manifest used when the caller did not send a package.json."""
    return {
        "name": name,
        "version": "1.0.0",
        "description": "Codehooks project",
        "type": "module",
        "main": f"{main}.js",
        "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
        "author": "",
        "license": "ISC",
        "dependencies": {"codehooks-js": "latest"},
    }


def build_manifest(files: Iterable[StagedFile], *, name: str, main: str = "index") -> list[StagedFile]:
    """Return ``files`` with a package.json merged over the default manifest.

    Caller fields win conflicts. Unparsable caller content falls back to the
    default manifest.
    """
    defaults = default_manifest(name, main)
    result: list[StagedFile] = []
    found = False
    for staged in files:
        if staged.path != MANIFEST_NAME:
            result.append(staged)
            continue
        found = True
        manifest = defaults
        try:
            supplied = json.loads(staged.content)
        except ValueError:
            logger.warning("Invalid package.json content, using default")
        else:
            if isinstance(supplied, dict):
                manifest = {**defaults, **supplied}
            else:
                logger.warning("package.json is not a JSON object, using default")
        result.append(StagedFile(MANIFEST_NAME, json.dumps(manifest, indent=2)))

    if not found:
        logger.info("No package.json provided, creating default one")
        result.append(StagedFile(MANIFEST_NAME, json.dumps(defaults, indent=2)))
    return result


def safe_subpath(root: Path, relative: str) -> Path:
    """Resolve ``relative`` under ``root``; raise StagingError if it escapes."""
    if not relative or PurePosixPath(relative).is_absolute() or Path(relative).is_absolute():
        raise StagingError(f"File path must be relative: {relative!r}")
    target = (root / relative).resolve()
    try:
        target.relative_to(root.resolve())
    except ValueError:
        raise StagingError(f"File path escapes staging directory: {relative!r}") from None
    return target


class StagingManager:
    """Creates and removes per-call scratch directories."""

    def __init__(self, scratch_dir: Path | str):
        self.scratch_dir = Path(scratch_dir)

    def _make_dir(self, prefix: str) -> Path:
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        path = self.scratch_dir / f"{prefix}{uuid.uuid4().hex}"
        path.mkdir(parents=False, exist_ok=False)
        return path

    @staticmethod
    def _write(root: Path, files: list[StagedFile]) -> None:
        for staged in files:
            target = safe_subpath(root, staged.path)
            target.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Writing file: {target}")
            if isinstance(staged.content, bytes):
                target.write_bytes(staged.content)
            else:
                target.write_text(staged.content, encoding="utf-8")

    async def _remove(self, path: Path, *, strict: bool) -> None:
        try:
            await asyncio.to_thread(shutil.rmtree, path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f"Failed to clean up staging directory {path}: {e}")
            # Only surfaces when the block itself succeeded
            if strict:
                raise StagingError(f"Could not remove staging directory: {e}") from e
            return
        logger.debug(f"Cleaned up staging directory: {path}")

    @asynccontextmanager
    async def stage(
        self,
        files: Iterable[StagedFile],
        *,
        prefix: str = "codehooks-",
        preserve_on_failure: bool = False,
    ) -> AsyncIterator[Path]:
        """Materialize ``files`` in a fresh directory for the duration of the block."""
        files = list(files)
        try:
            root = await asyncio.to_thread(self._make_dir, prefix)
        except OSError as e:
            raise StagingError(f"Could not create staging directory in {self.scratch_dir}: {e}") from e
        logger.info(f"Created staging directory: {root}")

        failed = False
        preserve = False
        try:
            try:
                await asyncio.to_thread(self._write, root, files)
            except OSError as e:
                raise StagingError(f"Could not write staged files: {e}") from e
            yield root
        except CommandFailedError as e:
            failed = True
            if preserve_on_failure and not isinstance(e, StagingError):
                preserve = True
                logger.error(f"Command failed. Staging directory {root} preserved for inspection.")
            raise
        except BaseException:
            failed = True
            raise
        finally:
            if not preserve:
                await self._remove(root, strict=not failed)

    @asynccontextmanager
    async def stage_one(
        self,
        content: str | bytes,
        *,
        name: str | None = None,
        suffix: str = "",
        prefix: str = "codehooks-",
    ) -> AsyncIterator[Path]:
        """Materialize a single file and yield its path; always cleaned up."""
        filename = Path(name).name if name else f"{prefix}{uuid.uuid4().hex[:8]}{suffix}"
        if not filename or filename in (".", ".."):
            raise StagingError(f"Invalid file name: {name!r}")
        async with self.stage([StagedFile(filename, content)], prefix=prefix) as root:
            yield root / filename
