"""
Runtime Configuration Module

Provides configuration loading for the builder CLI and claim service.
"""

from .runtime import (
    RuntimeConfig,
    TokenConfig,
    ServiceConfig,
    load_runtime_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "TokenConfig",
    "ServiceConfig",
    "load_runtime_config",
    "get_default_config_template",
]
