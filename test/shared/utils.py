from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings


def bearer_headers(
    user_id: str, *, role: Optional[str] = None, email: str = '', name: str = ''
) -> Dict[str, str]:
    """Authorization header with a token signed like the identity provider's (HS256)."""
    claims: Dict[str, Any] = {'sub': user_id, 'email': email, 'name': name}
    if role:
        claims['role'] = role
    token = jwt.encode(
        claims,
        settings.IDENTITY_JWT_SECRET.get_secret_value(),
        algorithm=settings.IDENTITY_JWT_ALGORITHM,
    )
    return {'Authorization': f'Bearer {token}'}


def assert_response_status(response: Any, expected_status: int) -> None:
    assert response.status_code == expected_status, (
        f'Expected {expected_status}, got {response.status_code}: {response.text}'
    )
