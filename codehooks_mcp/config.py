"""MCP configuration loader - reads from codehooks-mcp.toml with ENV overrides."""  # noqa: I001

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tempfile
import tomllib
from typing import cast

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class McpServerConfig:
    """Server settings."""

    name: str = "codehooks-mcp"
    log_level: str = "info"

    def validate(self) -> None:
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")


@dataclass
class McpCohoConfig:
    """How the coho CLI is invoked."""

    binary: str = "coho"
    timeout: int = 120  # seconds, per CLI call
    scratch_dir: str = field(default_factory=tempfile.gettempdir)
    install_command: list[str] = field(default_factory=lambda: ["npm", "install"])
    install_timeout: int = 300
    probe_on_start: bool = True

    def validate(self) -> None:
        if not self.binary:
            raise ValueError("coho binary must be set")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.install_timeout <= 0:
            raise ValueError("install_timeout must be positive")
        if not self.install_command:
            raise ValueError("install_command must not be empty")
        path = Path(self.scratch_dir)
        if path.exists() and not path.is_dir():
            raise ValueError(f"scratch_dir '{self.scratch_dir}' exists but is not a directory")


@dataclass
class McpObservabilityConfig:
    """Logging settings."""

    log_format: str = "text"  # "json" | "text"
    log_level: str = "info"
    include_correlation_id: bool = True

    def validate(self) -> None:
        if self.log_format not in ("json", "text"):
            raise ValueError(f"Invalid log_format: {self.log_format}")
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")


@dataclass
class McpConfig:
    """Root MCP configuration."""

    config_version: str = "v1"
    server: McpServerConfig = field(default_factory=McpServerConfig)
    coho: McpCohoConfig = field(default_factory=McpCohoConfig)
    observability: McpObservabilityConfig = field(default_factory=McpObservabilityConfig)

    def validate(self) -> None:
        self.server.validate()
        self.coho.validate()
        self.observability.validate()


def _apply_env_overrides(cfg: McpConfig) -> McpConfig:
    """Apply environment variable overrides. ENV beats TOML."""
    if os.getenv("CODEHOOKS_MCP_LOG_LEVEL"):
        level = os.getenv("CODEHOOKS_MCP_LOG_LEVEL", cfg.server.log_level).lower()
        cfg.server.log_level = level
        cfg.observability.log_level = level

    if os.getenv("CODEHOOKS_MCP_LOG_FORMAT"):
        cfg.observability.log_format = os.getenv(
            "CODEHOOKS_MCP_LOG_FORMAT", cfg.observability.log_format
        )

    # CODEHOOKS_CLI - path to the coho binary
    if os.getenv("CODEHOOKS_CLI"):
        cfg.coho.binary = os.getenv("CODEHOOKS_CLI", cfg.coho.binary)

    if os.getenv("CODEHOOKS_MCP_TIMEOUT"):
        try:
            cfg.coho.timeout = int(os.getenv("CODEHOOKS_MCP_TIMEOUT", ""))
        except ValueError as e:
            raise ValueError(f"CODEHOOKS_MCP_TIMEOUT must be an integer: {e}") from e

    if os.getenv("CODEHOOKS_MCP_SCRATCH_DIR"):
        cfg.coho.scratch_dir = os.getenv("CODEHOOKS_MCP_SCRATCH_DIR", cfg.coho.scratch_dir)

    return cfg


def load_config(config_path: str | Path | None = None) -> McpConfig:
    """
    Load MCP config from codehooks-mcp.toml with ENV overrides.

    Precedence: ENV → TOML → defaults

    Args:
        config_path: Path to the TOML file. If None, searches:
            1. CODEHOOKS_MCP_CONFIG env var
            2. ./codehooks-mcp.toml

    Returns:
        McpConfig dataclass with merged settings.
    """
    if config_path is None:
        if os.getenv("CODEHOOKS_MCP_CONFIG"):
            config_path = Path(cast(str, os.getenv("CODEHOOKS_MCP_CONFIG")))
        else:
            config_path = Path("codehooks-mcp.toml")
    else:
        config_path = Path(config_path)

    cfg = McpConfig()

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        mcp_data = data.get("mcp", {})
        cfg.config_version = mcp_data.get("config_version", cfg.config_version)

        srv = mcp_data.get("server", {})
        cfg.server.name = srv.get("name", cfg.server.name)
        cfg.server.log_level = srv.get("log_level", cfg.server.log_level)

        coho = mcp_data.get("coho", {})
        cfg.coho.binary = coho.get("binary", cfg.coho.binary)
        cfg.coho.timeout = coho.get("timeout", cfg.coho.timeout)
        cfg.coho.scratch_dir = coho.get("scratch_dir", cfg.coho.scratch_dir)
        cfg.coho.install_command = coho.get("install_command", cfg.coho.install_command)
        cfg.coho.install_timeout = coho.get("install_timeout", cfg.coho.install_timeout)
        cfg.coho.probe_on_start = coho.get("probe_on_start", cfg.coho.probe_on_start)

        obs = mcp_data.get("observability", {})
        cfg.observability.log_format = obs.get("log_format", cfg.observability.log_format)
        cfg.observability.log_level = obs.get("log_level", cfg.server.log_level)
        cfg.observability.include_correlation_id = obs.get(
            "include_correlation_id", cfg.observability.include_correlation_id
        )

    cfg = _apply_env_overrides(cfg)

    cfg.validate()

    return cfg
