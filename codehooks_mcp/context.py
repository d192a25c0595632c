"""Credential store for the Codehooks project the server acts on."""

from __future__ import annotations

from dataclasses import dataclass, replace
import os

DEFAULT_SPACE = "dev"


@dataclass(frozen=True)
class Credentials:
    """Snapshot of project, space and admin token."""

    project: str = ""
    space: str = DEFAULT_SPACE
    admin_token: str = ""

    def is_complete(self) -> bool:
        return bool(self.project.strip()) and bool(self.admin_token.strip())

    def missing(self) -> list[str]:
        """Names of the environment variables that still need a value."""
        names = []
        if not self.project.strip():
            names.append("CODEHOOKS_PROJECT_NAME")
        if not self.admin_token.strip():
            names.append("CODEHOOKS_ADMIN_TOKEN")
        return names


class CredentialStore:
    """Process-wide credentials, read by every tool call.

    Populated from the environment at startup and updated by the
    ``set_admin_token`` / ``set_project`` tools. Updates swap in a new
    immutable snapshot; concurrent writers are last-writer-wins.
    """

    def __init__(self, credentials: Credentials | None = None):
        self._credentials = credentials or Credentials()

    @classmethod
    def from_env(cls) -> CredentialStore:
        """Create a store from CODEHOOKS_* environment variables."""
        return cls(
            Credentials(
                project=os.getenv("CODEHOOKS_PROJECT_NAME")
                or os.getenv("CODEHOOKS_PROJECT_ID")
                or "",
                space=os.getenv("CODEHOOKS_SPACE") or DEFAULT_SPACE,
                admin_token=os.getenv("CODEHOOKS_ADMIN_TOKEN") or "",
            )
        )

    def current(self) -> Credentials:
        return self._credentials

    def configure(
        self,
        token: str | None = None,
        project: str | None = None,
        space: str | None = None,
    ) -> Credentials:
        """Merge the given fields into the current credentials."""
        changes: dict[str, str] = {}
        if token is not None:
            changes["admin_token"] = token
        if project is not None:
            changes["project"] = project
        if space is not None:
            changes["space"] = space or DEFAULT_SPACE
        self._credentials = replace(self._credentials, **changes)
        return self._credentials

    @property
    def secret(self) -> str:
        return self._credentials.admin_token
