"""Dependency injection for API routes.

The gateway is built once by the app lifespan and stored on
``app.state.gateway``. Routes receive it through ``GatewayDep`` and never
import a module-level instance, so tests can mount routes on an app with
any gateway they like.

The caller's bearer token is read from each request by ``TokenDep`` and
handed to the gateway per call. The server keeps no login state.

Called by: All route modules via type aliases (GatewayDep, TokenDep)
Depends on: core/gateway.py
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request

from bankdash.core.gateway import ResilientGateway

# ─── Gateway ───────────────────────────────────────────────────────────────────


def get_gateway(request: Request) -> ResilientGateway:
    """Return the gateway owned by the running app."""
    return request.app.state.gateway


GatewayDep = Annotated[ResilientGateway, Depends(get_gateway)]

# ─── Auth ──────────────────────────────────────────────────────────────────────


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """Extract the bearer token from the Authorization header.

    A missing header yields None and the backend decides whether the call
    needs a session. A header that is present but not a bearer token is a
    client error.

    Raises:
        HTTPException 401: Malformed Authorization header.
    """
    if authorization is None:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail={
                "code": "UNAUTHORIZED",
                "message": "Authorization header must be 'Bearer <token>'",
            },
        )
    return token.strip()


TokenDep = Annotated[str | None, Depends(get_bearer_token)]
