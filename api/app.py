"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, claims
from api.errors import (
    APIError,
    airdrop_error_handler,
    api_error_handler,
    generic_error_handler,
)
from core.schemas.errors import AirdropException


# Configure logging from AIRDROP_LOG_LEVEL
logging.basicConfig(
    level=getattr(logging, os.getenv("AIRDROP_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Airdrop Claim API",
        description="""
HTTP API for claiming airdrop allocations against a published Merkle root.

## Endpoints

- **GET /health** - Health check
- **GET /root** - Published root and loaded distribution
- **POST /root** - Publish the root (owner only, once)
- **GET /proof/{index}** - Claim data for an allocation
- **POST /verify** - Check a claim without consuming it
- **POST /claim** - Verify and consume a claim
- **GET /balances/{account}** - Credited balance

Amounts are base-unit integers, returned as decimal strings.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, airdrop_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(claims.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config import load_runtime_config

    config = load_runtime_config()
    uvicorn.run(app, host=config.service.host, port=config.service.port)
