"""
Identity Provider Token Verification

Tokens are issued by the external identity provider. With IDENTITY_JWKS_URL
set, signatures are checked against the provider's published keys (RS256);
otherwise a shared HS256 secret is used.
"""

from typing import Any, Dict, Iterable, Optional

import anyio
import jwt

from src.platform.exception.exceptions import AuthenticationError
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser


class IdentityAuth:
    def __init__(
        self,
        *,
        jwks_url: str = '',
        secret: str = '',
        algorithm: str = 'HS256',
        audience: str = '',
        admin_user_ids: Iterable[str] = (),
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience
        self.admin_user_ids = frozenset(admin_user_ids)
        self._jwk_client: Optional[jwt.PyJWKClient] = jwt.PyJWKClient(jwks_url) if jwks_url else None

    async def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            if self._jwk_client is not None:
                # PyJWKClient fetches keys with blocking urllib
                signing_key: Any = (
                    await anyio.to_thread.run_sync(self._jwk_client.get_signing_key_from_jwt, token)
                ).key
                algorithms = ['RS256']
            else:
                signing_key = self.secret
                algorithms = [self.algorithm]

            return jwt.decode(
                token,
                signing_key,
                algorithms=algorithms,
                audience=self.audience or None,
                options={'verify_aud': bool(self.audience), 'require': ['sub']},
            )
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    async def authenticate(self, token: Optional[str]) -> AuthenticatedUser:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = await self.decode_token(token)
        user_id = str(payload['sub'])
        return AuthenticatedUser(
            id=user_id,
            email=payload.get('email') or '',
            name=payload.get('name') or '',
            is_admin=payload.get('role') == 'admin' or user_id in self.admin_user_ids,
        )
