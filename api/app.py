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

from api import __version__
from api.routes import health, verify
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    trieproof_error_handler,
)
from core.schemas.errors import TrieProofException


logging.basicConfig(
    level=getattr(logging, os.getenv("TRIEPROOF_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="trieproof API",
        description="""
HTTP API for Ethereum Merkle-Patricia-Trie proof verification.

## Endpoints

- **POST /verify** - Verify a key/value proof against a trie root
- **POST /verify/account** - Verify an eth_getProof result against a state root
- **GET /health** - Health check

## Outcomes

- `present` - the key maps to the returned value
- `absent` - the proof shows the key is not in the trie
- `invalid` - the proof is malformed, tampered, truncated or contradicts the claimed value
        """,
        version=__version__,
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
    app.add_exception_handler(TrieProofException, trieproof_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
