"""
Runtime Configuration

Central configuration for the builder CLI and the claim service.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)

# Environment variable prefix
ENV_PREFIX = "AIRDROP_"

CONFIG_SEARCH_PATHS: tuple[Path, ...] = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path.home() / ".config" / "airdrop" / "config.json",
)


@dataclass
class TokenConfig:
    """Token being distributed."""
    symbol: str = "AIR"
    decimals: int = 18


@dataclass
class ServiceConfig:
    """Configuration for the claim service."""
    distribution_path: str = "distribution.json"
    owner: Optional[str] = None  # address allowed to publish the root
    auto_publish: bool = False
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - A JSON config file (airdrop.json)
    - Environment variables (always override the file)
    - Programmatic construction
    """
    token: TokenConfig = field(default_factory=TokenConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - AIRDROP_LOG_LEVEL: Log level
        - AIRDROP_LOG_FILE: Optional log file
        - AIRDROP_TOKEN_SYMBOL: Token symbol
        - AIRDROP_TOKEN_DECIMALS: Token decimals
        - AIRDROP_DISTRIBUTION_PATH: Distribution served by the API
        - AIRDROP_OWNER: Address allowed to publish the root
        - AIRDROP_AUTO_PUBLISH: Publish the root at service start (true/false)
        - AIRDROP_API_HOST / AIRDROP_API_PORT: Service bind address
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}TOKEN_SYMBOL"):
            overrides.setdefault("token", {})["symbol"] = os.getenv(f"{ENV_PREFIX}TOKEN_SYMBOL")
        if os.getenv(f"{ENV_PREFIX}TOKEN_DECIMALS"):
            overrides.setdefault("token", {})["decimals"] = int(
                os.getenv(f"{ENV_PREFIX}TOKEN_DECIMALS", "18")
            )

        service: dict[str, Any] = {}
        if os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH"):
            service["distribution_path"] = os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH")
        if os.getenv(f"{ENV_PREFIX}OWNER"):
            service["owner"] = os.getenv(f"{ENV_PREFIX}OWNER")
        if os.getenv(f"{ENV_PREFIX}AUTO_PUBLISH"):
            service["auto_publish"] = (
                os.getenv(f"{ENV_PREFIX}AUTO_PUBLISH", "false").lower() == "true"
            )
        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            service["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            service["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))
        if service:
            overrides["service"] = service

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        token_data = data.get("token", {})
        service_data = data.get("service", {})

        return cls(
            token=TokenConfig(**token_data) if token_data else TokenConfig(),
            service=ServiceConfig(**service_data) if service_data else ServiceConfig(),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("token", {}).items():
            setattr(new_config.token, key, value)
        for key, value in overrides.get("service", {}).items():
            setattr(new_config.service, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "token": {
                "symbol": self.token.symbol,
                "decimals": self.token.decimals,
            },
            "service": {
                "distribution_path": self.service.distribution_path,
                "owner": self.service.owner,
                "auto_publish": self.service.auto_publish,
                "host": self.service.host,
                "port": self.service.port,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    When path is None the first existing file in CONFIG_SEARCH_PATHS is used.
    Environment variables ALWAYS override config file values.
    """
    candidates = [Path(path)] if path is not None else list(CONFIG_SEARCH_PATHS)

    config: RuntimeConfig | None = None
    for candidate in candidates:
        if candidate.exists():
            try:
                config = RuntimeConfig.from_file(candidate)
                logger.info(f"Loaded config from {candidate}")
                break
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Failed to parse {candidate}: {e}")
        elif path is not None:
            raise FileNotFoundError(f"Config file not found: {candidate}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """JSON template written by `airdrop config --init`."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
