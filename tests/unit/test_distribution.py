"""
Distribution Unit Tests
Tests for core/distribution/ (builder, io, validation)

Tests:
- Build: root, depth, leaves and proofs agree with the tree engine
- IO: save/load preserves every field; bad files raise DistributionIOException
- Validation: a built distribution passes; tampering fails the right check
"""
import json

import pytest

from fixtures import (
    make_address,
    make_allocations,
    make_distribution,
    make_tampered_distribution,
)

from core.crypto.hashing import hash32_from_hex, to_hex
from core.distribution import (
    allocations_of,
    build_distribution,
    dump_distribution,
    load_distribution,
    save_distribution,
    verify_distribution,
)
from core.merkle import EMPTY_TREE_ROOT, MerkleProver, MerkleVerifier, UINT256_MAX
from core.schemas.allocation import Allocation
from core.schemas.distribution import ODD_LAYER_POLICY, Distribution
from core.schemas.errors import (
    AllocationSetException,
    DistributionIOException,
    EncodingOverflowException,
    ErrorCodes,
)


class TestBuildDistribution:
    """Tests for build_distribution()."""

    def test_root_matches_prover(self, reference_allocations, distribution):
        assert distribution.root == to_hex(MerkleProver.compute_root(reference_allocations))

    def test_claims_in_index_order(self, distribution):
        assert [c.index for c in distribution.claims] == [0, 1, 2, 3, 4]

    def test_every_claim_verifies(self, distribution):
        root = hash32_from_hex(distribution.root)
        for claim in distribution.claims:
            assert MerkleVerifier.verify_allocation(
                claim.index, claim.account, claim.amount, claim.proof_bytes(), root
            )

    def test_depth_and_total(self, reference_allocations, distribution):
        assert distribution.tree_depth == 4
        assert distribution.total_amount == sum(a.amount for a in reference_allocations)
        assert distribution.odd_layer_policy == ODD_LAYER_POLICY

    def test_unordered_input_is_normalized(self):
        allocations = make_allocations(3)
        assert (
            build_distribution(list(reversed(allocations))).root
            == build_distribution(allocations).root
        )

    def test_sparse_indices_rejected(self):
        allocations = [Allocation(index=1, account=make_address(1), amount=1)]
        with pytest.raises(AllocationSetException):
            build_distribution(allocations)

    def test_overflow_aborts_whole_build(self):
        allocations = make_allocations(2) + [
            Allocation(index=2, account=make_address(3), amount=UINT256_MAX + 1)
        ]
        with pytest.raises(EncodingOverflowException):
            build_distribution(allocations)

    def test_empty_distribution(self):
        distribution = build_distribution([])
        assert distribution.root == to_hex(EMPTY_TREE_ROOT)
        assert distribution.claims == []
        assert distribution.tree_depth == 0

    def test_allocations_of_round_trip(self, reference_allocations, distribution):
        assert allocations_of(distribution) == reference_allocations

    def test_find_and_claims_for(self, distribution):
        entry = distribution.find(index=2)
        assert entry is not None and entry.index == 2
        assert distribution.find(index=99) is None
        assert distribution.find(account=entry.account.lower()) == entry
        assert distribution.claims_for(make_address(0xDEAD)) == []


class TestDistributionIO:
    """Tests for save/load/dump."""

    def test_round_trip(self, tmp_path, distribution):
        path = save_distribution(distribution, tmp_path / "nested" / "dist.json")
        loaded = load_distribution(path)
        assert loaded == distribution

    def test_dump_is_stable(self, distribution):
        assert dump_distribution(distribution) == dump_distribution(distribution)
        assert dump_distribution(distribution).endswith("\n")

    def test_amounts_written_as_strings(self, distribution):
        data = json.loads(dump_distribution(distribution))
        assert data["total_amount"] == str(distribution.total_amount)
        assert all(isinstance(c["amount"], str) for c in data["claims"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(DistributionIOException, match="not found"):
            load_distribution(tmp_path / "nope.json")

    def test_not_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(DistributionIOException, match="Cannot read") as exc_info:
            load_distribution(path)
        assert exc_info.value.code == ErrorCodes.DISTRIBUTION_IO_ERROR

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"root": "0x00"}))
        with pytest.raises(DistributionIOException, match="Invalid distribution") as exc_info:
            load_distribution(path)
        assert exc_info.value.code == ErrorCodes.SCHEMA_VALIDATION_ERROR

    def test_unsupported_version(self, tmp_path, distribution):
        data = json.loads(dump_distribution(distribution))
        data["schema_version"] = "v99"
        path = tmp_path / "future.json"
        path.write_text(json.dumps(data))
        with pytest.raises(DistributionIOException, match="v99") as exc_info:
            load_distribution(path)
        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_VERSION
        assert exc_info.value.details == {"path": str(path)}


class TestVerifyDistribution:
    """Tests for verify_distribution()."""

    def test_built_distribution_passes(self, distribution, assert_check_passed):
        result = verify_distribution(distribution)
        assert result.ok
        for check_id in ("scheme", "indices", "leaves", "root", "depth", "proofs", "total"):
            assert_check_passed(result, check_id)

    def test_tampered_amount_fails_leaves(self, assert_check_failed):
        result = verify_distribution(make_tampered_distribution())
        assert not result.ok
        assert_check_failed(result, "leaves")
        assert_check_failed(result, "total")

    def test_wrong_root_fails(self, distribution, assert_check_failed):
        data = distribution.model_dump(mode="json")
        data["root"] = "0x" + "11" * 32
        result = verify_distribution(Distribution.model_validate(data))
        assert_check_failed(result, "root")
        assert_check_failed(result, "proofs")

    def test_tampered_proof_fails(self, distribution, assert_check_failed, assert_check_passed):
        data = distribution.model_dump(mode="json")
        data["claims"][0]["proof"][0] = "0x" + "22" * 32
        result = verify_distribution(Distribution.model_validate(data))
        assert_check_passed(result, "root")
        assert_check_failed(result, "proofs")

    def test_wrong_depth_fails(self, distribution, assert_check_failed):
        data = distribution.model_dump(mode="json")
        data["tree_depth"] = 7
        assert_check_failed(verify_distribution(Distribution.model_validate(data)), "depth")

    def test_foreign_scheme_fails(self, distribution, assert_check_failed):
        data = distribution.model_dump(mode="json")
        data["leaf_encoding"] = "keccak256(abi.encodePacked(address,uint256))"
        assert_check_failed(verify_distribution(Distribution.model_validate(data)), "scheme")

    def test_empty_distribution_warns(self):
        result = verify_distribution(build_distribution([]))
        assert result.ok
        proofs = [c for c in result.checks if c.check_id == "proofs"][0]
        assert proofs.is_warning
