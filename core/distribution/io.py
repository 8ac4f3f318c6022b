"""
Distribution IO
Save and load Distribution documents to/from disk as JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.schemas.distribution import Distribution
from core.schemas.errors import DistributionIOException, ErrorCodes
from core.schemas.versioning import is_compatible_schema_version


logger = logging.getLogger(__name__)


def dump_distribution(distribution: Distribution) -> str:
    """Serialize a distribution to a stable, human-readable JSON string."""
    data = distribution.model_dump(mode="json")
    return json.dumps(data, indent=2, sort_keys=True) + "\n"


def save_distribution(distribution: Distribution, path: str | Path) -> Path:
    """
    Write a distribution document.

    Parent directories are created as needed.

    Returns:
        Path to the written file
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_distribution(distribution), encoding="utf-8")
    logger.info(f"Saved distribution with root {distribution.root} to {out_path}")
    return out_path


def load_distribution(path: str | Path) -> Distribution:
    """
    Read and validate a distribution document.

    Raises:
        DistributionIOException: If the file is missing or not JSON
            (DISTRIBUTION_IO_ERROR), declares another schema version
            (UNSUPPORTED_VERSION), or does not match the Distribution
            schema (SCHEMA_VALIDATION_ERROR)
    """
    in_path = Path(path)
    if not in_path.exists():
        raise DistributionIOException(f"Distribution not found: {in_path}", path=str(in_path))

    try:
        data = json.loads(in_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DistributionIOException(
            f"Cannot read distribution {in_path}: {e}", path=str(in_path)
        ) from e

    version = data.get("schema_version") if isinstance(data, dict) else None
    if isinstance(version, str) and not is_compatible_schema_version(version):
        raise DistributionIOException(
            f"Unsupported distribution schema version {version!r} in {in_path}",
            path=str(in_path),
            code=ErrorCodes.UNSUPPORTED_VERSION,
        )

    try:
        return Distribution.model_validate(data)
    except ValidationError as e:
        raise DistributionIOException(
            f"Invalid distribution {in_path}: {e}",
            path=str(in_path),
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
        ) from e


__all__ = [
    "dump_distribution",
    "save_distribution",
    "load_distribution",
]
