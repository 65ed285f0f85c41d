"""
Minimal API (FastAPI)

HTTP API for trieproof:
- POST /verify - Verify an MPT proof
- POST /verify/account - Verify an eth_getProof result
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
