from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.exception.exceptions import ForbiddenError
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (
    JwtAuth,
)


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def can_purchase_tickets(user: UserEntity) -> bool:
        return user.role == UserRole.ATTENDEE

    @staticmethod
    def can_manage_events(user: UserEntity) -> bool:
        return user.role == UserRole.ORGANIZER


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Resolve the bearer token to a principal (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(credentials.credentials if credentials else None)


async def require_attendee(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_attendee',
        attributes={
            'user.id': current_user.id,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_purchase_tickets(current_user):
            raise ForbiddenError('Only attendees can purchase tickets')
        return current_user


async def require_organizer(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.can_manage_events(current_user):
        raise ForbiddenError('Only organizers can perform this action')
    return current_user
