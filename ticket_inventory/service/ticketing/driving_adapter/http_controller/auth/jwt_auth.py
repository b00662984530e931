"""
Bearer token verification

Tokens are issued by the identity provider; this service only verifies the
signature and reads the principal (user id + role) from the claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from ticket_inventory.platform.config.core_setting import settings
from ticket_inventory.platform.constant.column_limit import USER_ID_LENGTH
from ticket_inventory.platform.exception.exceptions import AuthenticationError
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        """Mint a token the way the identity provider does (seed script and tests)"""
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user_entity.id,
            'role': user_entity.role.value,
            'name': user_entity.name,
            'email': user_entity.email,
            'iat': now,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Token expired')
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('sub')
        role = payload.get('role')
        if not user_id or not role:
            raise AuthenticationError('Invalid token')
        if len(str(user_id)) > USER_ID_LENGTH:
            raise AuthenticationError('Invalid token subject')

        try:
            user_role = UserRole(role)
        except ValueError:
            raise AuthenticationError(f'Unknown role: {role}')

        return UserEntity(
            id=str(user_id),
            role=user_role,
            email=payload.get('email') or '',
            name=payload.get('name') or '',
        )
