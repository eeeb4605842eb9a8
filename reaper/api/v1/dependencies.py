"""Presentation-layer dependency injection.

Routes depend on these functions, never on infrastructure directly. The
reaper object graph is built once in the lifespan (reaper.core.composition)
and read from app.state here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reaper.application.dtos.caller import Caller
from reaper.application.services.pause_gate import PauseGate
from reaper.application.use_cases.reaping import ManualReapUseCase
from reaper.core.composition import ReaperServices
from reaper.core.scheduler import FixedRateScheduler
from reaper.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ReaperNotConfiguredException,
)
from reaper.infrastructure.security.jwt import permissions_from_payload, verify_token

_http_bearer = HTTPBearer(auto_error=False)


def get_reaper_services(request: Request) -> ReaperServices:
    """Reaper services built at startup."""
    services = getattr(request.app.state, "reaper", None)
    if services is None:
        raise RuntimeError("Reaper services not initialized (lifespan not run)")
    return services


def get_manual_reap_use_case(
    services: Annotated[ReaperServices, Depends(get_reaper_services)],
) -> ManualReapUseCase:
    return services.manual


def get_pause_gate(
    services: Annotated[ReaperServices, Depends(get_reaper_services)],
) -> PauseGate:
    """Pause gate; requires the reaper bucket to be configured."""
    if services.pause_gate is None:
        raise ReaperNotConfiguredException()
    return services.pause_gate


def get_scheduler(request: Request) -> FixedRateScheduler | None:
    return getattr(request.app.state, "scheduler", None)


async def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Caller:
    """Return the caller from a verified bearer JWT; raise 401 if missing or invalid."""
    if not credentials:
        raise AuthenticationException()
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    return Caller(
        identity=str(payload["sub"]),
        permissions=permissions_from_payload(payload),
    )


async def require_delete_permission(
    caller: Annotated[Caller, Depends(get_current_caller)],
    services: Annotated[ReaperServices, Depends(get_reaper_services)],
) -> Caller:
    """Require an authenticated caller holding the delete permission."""
    if not await services.authorizer.has_delete_permission(caller):
        raise AuthorizationException(resource="record", action="delete")
    return caller
