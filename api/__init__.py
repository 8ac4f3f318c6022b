"""
Claim Service API (FastAPI)

HTTP API over one claim distributor:
- GET /health - Health check
- GET /root, POST /root - Read or publish the trusted root
- GET /proof/{index} - Claim data for an allocation
- POST /verify - Check a claim without consuming it
- POST /claim - Verify and consume a claim
- GET /balances/{account} - Credited balance

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
