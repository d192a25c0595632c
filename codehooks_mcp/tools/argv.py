"""Helpers for building coho argument vectors."""

from __future__ import annotations

import json

from codehooks_mcp.context import Credentials


def project_args(creds: Credentials, *, project_flag: str = "--project") -> list[str]:
    """``--project <name> --space <space>``; some subcommands spell it ``--projectname``."""
    return [project_flag, creds.project, "--space", creds.space]


def option(flag: str, value: str | int | None) -> list[str]:
    """``[flag, value]`` when value is set (non-empty, non-zero), else nothing."""
    if value is None or value == "" or value == 0:
        return []
    return [flag, str(value)]


def switch(flag: str, enabled: bool) -> list[str]:
    return [flag] if enabled else []


def pretty_json(text: str) -> str:
    """Re-indent JSON output for readability; non-JSON output is returned as is."""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text
