"""
Claim Routes

Root publication, proof lookup, claim verification and consumption.
Engine exceptions propagate to the handler registered in api.app.
Handlers that reach the distributor are plain functions: its ledger
lock blocks, so they run in the FastAPI thread pool.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from eth_utils import is_hex_address, to_checksum_address

from api.deps import ClaimService, get_service
from api.errors import DistributionUnavailableError, InvalidRequestError, NotFoundError
from api.models.requests import ClaimRequest, PublishRootRequest, VerifyRequest
from api.models.responses import (
    BalanceResponse,
    ClaimResponse,
    ProofResponse,
    RootResponse,
    VerifyResponse,
)
from core.crypto.hashing import to_hex


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claims"])


def _root_response(service: ClaimService) -> RootResponse:
    distributor = service.distributor
    distribution = service.distribution
    return RootResponse(
        published=distributor.is_published,
        root=to_hex(distributor.root) if distributor.root is not None else None,
        distribution_root=distribution.root if distribution else None,
        allocations=distribution.size if distribution else 0,
    )


@router.get("/root", response_model=RootResponse)
def get_root(service: ClaimService = Depends(get_service)) -> RootResponse:
    """Published root and the root of the loaded distribution."""
    return _root_response(service)


@router.post("/root", response_model=RootResponse)
def publish_root(
    request: PublishRootRequest,
    service: ClaimService = Depends(get_service),
) -> RootResponse:
    """
    Publish the trusted root. Succeeds once, for an authorized caller.

    A root that differs from the loaded distribution is accepted but logged:
    proofs served by GET /proof will not verify against it.
    """
    service.distributor.publish_root(request.root, caller=request.caller)
    if service.distribution and service.distribution.root != request.root.lower():
        logger.warning(
            f"Published root {request.root} differs from distribution {service.distribution.root}"
        )
    return _root_response(service)


@router.get("/proof/{index}", response_model=ProofResponse)
def get_proof(index: int, service: ClaimService = Depends(get_service)) -> ProofResponse:
    """Claim data for one allocation."""
    if service.distribution is None:
        raise DistributionUnavailableError()
    entry = service.distribution.find(index=index)
    if entry is None:
        raise NotFoundError(f"No allocation with index {index}", details={"index": index})
    return ProofResponse(
        root=service.distribution.root,
        index=entry.index,
        account=entry.account,
        amount=str(entry.amount),
        leaf=entry.leaf,
        proof=entry.proof,
        claimed=service.distributor.is_claimed(entry.index),
    )


@router.post("/verify", response_model=VerifyResponse)
def verify_claim(
    request: VerifyRequest,
    service: ClaimService = Depends(get_service),
) -> VerifyResponse:
    """Check a claim against the published root without consuming it."""
    distributor = service.distributor
    return VerifyResponse(
        valid=distributor.verify(request.index, request.account, request.amount, request.proof),
        claimed=distributor.is_claimed(request.index),
    )


@router.post("/claim", response_model=ClaimResponse)
def claim(
    request: ClaimRequest,
    service: ClaimService = Depends(get_service),
) -> ClaimResponse:
    """Verify and consume one allocation."""
    receipt = service.distributor.claim(
        request.index,
        request.account,
        request.amount,
        request.proof,
    )
    return ClaimResponse(receipt=receipt)


@router.get("/balances/{account}", response_model=BalanceResponse)
def get_balance(account: str, service: ClaimService = Depends(get_service)) -> BalanceResponse:
    """Credited balance for an account."""
    if not is_hex_address(account):
        raise InvalidRequestError(f"Invalid address: {account}")
    return BalanceResponse(
        account=to_checksum_address(account),
        balance=str(service.distributor.balance_of(account)),
        symbol=service.symbol,
    )
