from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.identity_auth import (
    IdentityAuth,
)


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_auth: IdentityAuth = Depends(Provide[Container.identity_auth]),
) -> AuthenticatedUser:
    """Caller from the bearer token (stateless, no DB query)"""
    return await identity_auth.authenticate(credentials.credentials if credentials else None)


async def require_admin(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin', attributes={'user.id': current_user.id}
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Admin access required')
        return current_user
