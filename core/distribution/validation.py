"""
Distribution Validation
Offline consistency checks for a published Distribution.

Rebuilds the tree from the listed claims and confirms that every leaf,
every proof, the root and the totals agree with what the document
declares. A distribution that passes can be handed to any verifier that
implements the same leaf and pair rules.
"""
from __future__ import annotations

import logging

from core.crypto.hashing import hash32_from_hex, to_hex
from core.merkle.encoding import leaf_hash
from core.merkle.merkle_tree import EMPTY_TREE_ROOT, MerkleTree, verify_leaf
from core.schemas.distribution import (
    LEAF_ENCODING,
    ODD_LAYER_POLICY,
    PAIR_HASHING,
    Distribution,
)
from core.schemas.errors import AirdropException
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def _check_scheme(distribution: Distribution) -> CheckResult:
    declared = {
        "leaf_encoding": distribution.leaf_encoding,
        "pair_hashing": distribution.pair_hashing,
        "odd_layer_policy": distribution.odd_layer_policy,
    }
    expected = {
        "leaf_encoding": LEAF_ENCODING,
        "pair_hashing": PAIR_HASHING,
        "odd_layer_policy": ODD_LAYER_POLICY,
    }
    mismatched = [k for k in expected if declared[k] != expected[k]]
    if mismatched:
        return CheckResult.failed(
            "scheme",
            f"Unsupported commitment scheme: {', '.join(mismatched)}",
            details={k: declared[k] for k in mismatched},
        )
    return CheckResult.passed("scheme", "Commitment scheme matches")


def _check_indices(distribution: Distribution) -> CheckResult:
    bad = [
        (position, claim.index)
        for position, claim in enumerate(distribution.claims)
        if claim.index != position
    ]
    if bad:
        position, index = bad[0]
        return CheckResult.failed(
            "indices",
            f"Claim at position {position} has index {index}",
            details={"mismatches": len(bad)},
        )
    return CheckResult.passed("indices", "Indices are dense and ordered")


def _recompute_leaves(distribution: Distribution) -> tuple[list[bytes], CheckResult]:
    leaves: list[bytes] = []
    bad_indices: list[int] = []
    for claim in distribution.claims:
        try:
            computed = leaf_hash(claim.index, claim.account, claim.amount)
        except AirdropException as e:
            logger.warning(f"Claim {claim.index} cannot be encoded: {e.message}")
            bad_indices.append(claim.index)
            continue
        leaves.append(computed)
        if to_hex(computed) != claim.leaf:
            bad_indices.append(claim.index)

    if bad_indices:
        return leaves, CheckResult.failed(
            "leaves",
            f"{len(bad_indices)} leaf hash(es) do not match their fields",
            details={"indices": bad_indices[:20]},
        )
    return leaves, CheckResult.passed("leaves", f"{len(leaves)} leaf hashes match")


def verify_distribution(distribution: Distribution) -> VerificationResult:
    """
    Run every consistency check against a distribution.

    Returns:
        VerificationResult; ok is True only if all checks pass
    """
    checks: list[CheckResult] = [
        _check_scheme(distribution),
        _check_indices(distribution),
    ]

    leaves, leaf_check = _recompute_leaves(distribution)
    checks.append(leaf_check)

    root = hash32_from_hex(distribution.root)
    if leaf_check.ok:
        tree = MerkleTree.from_leaves(leaves)
        if tree.root == root:
            checks.append(CheckResult.passed("root", "Root matches rebuilt tree"))
        else:
            checks.append(CheckResult.failed(
                "root",
                "Root does not match rebuilt tree",
                details={"declared": distribution.root, "computed": to_hex(tree.root)},
            ))
        if tree.depth == distribution.tree_depth:
            checks.append(CheckResult.passed("depth", f"Tree depth {tree.depth}"))
        else:
            checks.append(CheckResult.failed(
                "depth",
                f"Declared depth {distribution.tree_depth}, rebuilt {tree.depth}",
            ))
    else:
        checks.append(CheckResult.failed("root", "Root not checked: leaves are inconsistent"))

    if not distribution.claims:
        if root == EMPTY_TREE_ROOT:
            checks.append(CheckResult.warning("proofs", "Empty distribution: nothing is claimable"))
        else:
            checks.append(CheckResult.failed("proofs", "Empty distribution must use the empty-tree root"))
    else:
        failed_proofs = [
            claim.index
            for claim in distribution.claims
            if not verify_leaf(hash32_from_hex(claim.leaf), claim.proof_bytes(), root)
        ]
        if failed_proofs:
            checks.append(CheckResult.failed(
                "proofs",
                f"{len(failed_proofs)} proof(s) do not verify against the root",
                details={"indices": failed_proofs[:20]},
            ))
        else:
            checks.append(CheckResult.passed("proofs", f"{len(distribution.claims)} proofs verify"))

    total = sum(c.amount for c in distribution.claims)
    if total == distribution.total_amount:
        checks.append(CheckResult.passed("total", f"Total amount {total}"))
    else:
        checks.append(CheckResult.failed(
            "total",
            f"Declared total {distribution.total_amount}, claims sum to {total}",
        ))

    result = VerificationResult.from_checks(checks)
    logger.info(
        f"Distribution {distribution.root}: {result.passed_count}/{len(checks)} checks passed"
    )
    return result


__all__ = ["verify_distribution"]
