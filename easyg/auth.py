"""Shared-key guard for the /program routes.

Applied once per router (``APIRouter(dependencies=[Depends(require_api_key)])``)
so it runs before any route-level work. With API_KEY unset the routes are open.
"""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Header

from easyg.config import settings


def presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    """Key from X-API-Key, else from an ``Authorization: Bearer`` header."""
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


def key_matches(candidate: str | None, expected: str) -> bool:
    if candidate is None:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


async def require_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> None:
    if settings.api_key is None:
        return
    if not key_matches(presented_key(x_api_key, authorization), settings.api_key):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
