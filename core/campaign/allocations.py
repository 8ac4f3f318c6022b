"""
Campaign Allocations
Turn finalized contribution data into an ordered allocation set.

Index assignment happens here and becomes part of every leaf's identity:
- Contribution events get indices in receipt order (one record per event)
- (account, amount) pairs get indices by position
- Pre-indexed triples must already form a dense 0..n-1 set

Once returned, the allocation list is closed; the Builder hashes it as is.
"""
from __future__ import annotations

import csv
import json
import logging
from decimal import Decimal, InvalidOperation, localcontext
from pathlib import Path
from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from core.schemas.allocation import Allocation, Contribution
from core.schemas.errors import AllocationSetException


logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18

# Accepted column / key names for the recipient
_ACCOUNT_KEYS = ("account", "address", "contributor")


def to_base_units(value: str | int | Decimal, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Scale a decimal token quantity into integer base units.

    Args:
        value: Quantity such as "2.5" or 3
        decimals: Token decimals (18 for ether-like tokens)

    Returns:
        Integer amount, e.g. to_base_units("2.5") == 2_500_000_000_000_000_000

    Raises:
        ValueError: If the value is negative, not a number, or has more
            fractional digits than the token supports
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be numeric, got bool")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    try:
        quantity = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e

    if not quantity.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    if quantity < 0:
        raise ValueError(f"Amount must be non-negative, got {value!r}")

    with localcontext() as ctx:
        # uint256 needs 78 digits; the default context keeps 28
        ctx.prec = 100
        scaled = quantity.scaleb(decimals)
        integral = scaled.to_integral_value()
    if scaled != integral:
        raise ValueError(
            f"Amount {value!r} has more than {decimals} fractional digits"
        )
    return int(scaled)


def _parse_amount(raw: Any, decimals: int | None) -> int:
    if decimals is not None:
        return to_base_units(raw, decimals)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    if not text.isdigit():
        raise ValueError(
            f"Amount must be an integer in base units, got {raw!r} "
            "(pass decimals to scale decimal quantities)"
        )
    return int(text)


def allocations_from_pairs(pairs: Iterable[tuple[str, int]]) -> list[Allocation]:
    """Assign indices by position to ordered (account, amount) pairs."""
    return [
        Allocation(index=i, account=account, amount=amount)
        for i, (account, amount) in enumerate(pairs)
    ]


def allocations_from_contributions(
    contributions: Sequence[Contribution],
    *,
    aggregate: bool = False,
) -> list[Allocation]:
    """
    Build allocations from contribution events in receipt order.

    Args:
        contributions: Events in the order they were observed
        aggregate: If True, merge repeat contributors into one record
            (summed, positioned at their first contribution)

    Returns:
        Allocation list indexed 0..n-1
    """
    if not aggregate:
        return allocations_from_pairs((c.contributor, c.amount) for c in contributions)

    totals: dict[str, int] = {}
    for c in contributions:
        totals[c.contributor] = totals.get(c.contributor, 0) + c.amount

    logger.debug(
        f"Aggregated {len(contributions)} contributions into {len(totals)} accounts"
    )
    return allocations_from_pairs(totals.items())


def normalize_allocations(records: Iterable[Allocation]) -> list[Allocation]:
    """
    Validate an allocation set and return it sorted by index.

    Raises:
        AllocationSetException: If indices are duplicated or not dense from 0
    """
    ordered = sorted(records, key=lambda a: a.index)
    seen: set[int] = set()
    for position, allocation in enumerate(ordered):
        if allocation.index in seen:
            raise AllocationSetException(
                f"Duplicate allocation index {allocation.index}",
                details={"index": allocation.index},
            )
        seen.add(allocation.index)
        if allocation.index != position:
            raise AllocationSetException(
                f"Allocation indices must be dense from 0: expected {position}, "
                f"found {allocation.index}",
                details={"expected": position, "found": allocation.index},
            )
    return ordered


def _row_account(row: dict[str, Any]) -> Any:
    for key in _ACCOUNT_KEYS:
        if row.get(key) not in (None, ""):
            return row[key]
    return None


def allocations_from_rows(
    rows: Sequence[dict[str, Any]],
    *,
    decimals: int | None = None,
    aggregate: bool = False,
) -> list[Allocation]:
    """
    Build an allocation set from loosely-typed rows.

    Rows carry an account (``account``/``address``/``contributor``), an
    ``amount`` and optionally an ``index``. Either every row has an index
    or none does.

    Raises:
        AllocationSetException: On malformed rows or an invalid index set
    """
    indexed = [row for row in rows if row.get("index") not in (None, "")]
    if indexed and len(indexed) != len(rows):
        raise AllocationSetException(
            "Either every row must carry an index or none may",
            details={"indexed_rows": len(indexed), "rows": len(rows)},
        )
    if indexed and aggregate:
        raise AllocationSetException("Pre-indexed allocations cannot be aggregated")

    records: list[Allocation] = []
    contributions: list[Contribution] = []
    for line, row in enumerate(rows, start=1):
        account = _row_account(row)
        if account is None:
            raise AllocationSetException(
                f"Row {line} has no account", details={"row": line}
            )
        try:
            amount = _parse_amount(row.get("amount", ""), decimals)
            if indexed:
                records.append(
                    Allocation(index=int(row["index"]), account=account, amount=amount)
                )
            else:
                contributions.append(Contribution(contributor=account, amount=amount))
        except (ValueError, ValidationError) as e:
            raise AllocationSetException(
                f"Row {line} is invalid: {e}", details={"row": line}
            ) from e

    if indexed:
        return normalize_allocations(records)
    return allocations_from_contributions(contributions, aggregate=aggregate)


def _load_rows(path: Path) -> list[dict[str, Any]]:
    if path.suffix.lower() == ".csv":
        with path.open("r", newline="", encoding="utf-8-sig") as f:
            return [
                {k.strip().lower(): (v or "").strip() for k, v in row.items() if k}
                for row in csv.DictReader(f)
            ]

    data = json.loads(path.read_text(encoding="utf-8-sig"))
    if isinstance(data, dict):
        for key in ("allocations", "contributions"):
            if isinstance(data.get(key), list):
                data = data[key]
                break
    if not isinstance(data, list):
        raise AllocationSetException(
            "JSON input must be a list of records or hold an "
            "'allocations'/'contributions' list"
        )

    rows: list[dict[str, Any]] = []
    for item in data:
        if isinstance(item, dict):
            rows.append(item)
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            rows.append({"account": item[0], "amount": item[1]})
        elif isinstance(item, (list, tuple)) and len(item) == 3:
            rows.append({"index": item[0], "account": item[1], "amount": item[2]})
        else:
            raise AllocationSetException(f"Unsupported record: {item!r}")
    return rows


def load_allocations(
    path: str | Path,
    *,
    decimals: int | None = None,
    aggregate: bool = False,
) -> list[Allocation]:
    """
    Load a finalized allocation set from a CSV or JSON file.

    CSV needs a header with ``account`` (or ``address``/``contributor``)
    and ``amount``, plus an optional ``index`` column. JSON may be a list
    of objects, of ``[account, amount]`` pairs or of
    ``[index, account, amount]`` triples.

    Raises:
        FileNotFoundError: If path does not exist
        AllocationSetException: On malformed input
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Allocation file not found: {path}")

    rows = _load_rows(path)
    allocations = allocations_from_rows(rows, decimals=decimals, aggregate=aggregate)
    logger.info(f"Loaded {len(allocations)} allocations from {path}")
    return allocations


__all__ = [
    "DEFAULT_DECIMALS",
    "to_base_units",
    "allocations_from_pairs",
    "allocations_from_contributions",
    "allocations_from_rows",
    "normalize_allocations",
    "load_allocations",
]
