"""
API Dependencies

Dependency injection for the API.
Provides the process-wide claim service: the loaded distribution plus
the distributor that consumes claims against it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from core.claims import ClaimDistributor, Authorizer, owner_only, deny_all
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.distribution.io import load_distribution
from core.schemas.distribution import Distribution
from core.schemas.errors import AirdropException

logger = logging.getLogger(__name__)


@dataclass
class ClaimService:
    """Distribution + distributor pair served by the API."""
    distributor: ClaimDistributor
    distribution: Distribution | None = None
    symbol: str = "AIR"


_service: ClaimService | None = None
_service_lock = threading.Lock()


def _authorizer_for(config: RuntimeConfig) -> Authorizer:
    """Only the configured owner may publish; nobody when no owner is set."""
    if config.service.owner:
        return owner_only(config.service.owner)
    logger.warning("No owner configured; root publication is disabled")
    return deny_all


def build_service(config: RuntimeConfig) -> ClaimService:
    """
    Create a ClaimService from configuration.

    The distribution at config.service.distribution_path is loaded when it
    exists. With auto_publish set, its root is published on behalf of the
    configured owner.
    """
    distributor = ClaimDistributor(
        authorize=_authorizer_for(config),
        symbol=config.token.symbol,
    )

    distribution: Distribution | None = None
    path = Path(config.service.distribution_path)
    if path.exists():
        distribution = load_distribution(path)
        logger.info(f"Serving distribution {distribution.root} ({distribution.size} allocations)")
    else:
        logger.warning(f"Distribution not found at {path}; proof lookups are unavailable")

    if config.service.auto_publish and distribution is not None:
        if config.service.owner is None:
            logger.warning("auto_publish requested without an owner; root left unpublished")
        else:
            try:
                distributor.publish_root(distribution.root, caller=config.service.owner)
            except AirdropException as e:
                logger.error(f"Auto-publish failed: {e.message}")

    return ClaimService(
        distributor=distributor,
        distribution=distribution,
        symbol=config.token.symbol,
    )


def get_service() -> ClaimService:
    """Return the process-wide ClaimService, creating it on first use."""
    global _service
    with _service_lock:
        if _service is None:
            _service = build_service(load_runtime_config())
        return _service


def reset_service(service: ClaimService | None = None) -> None:
    """Replace (or drop) the cached service. Used by tests."""
    global _service
    with _service_lock:
        _service = service
