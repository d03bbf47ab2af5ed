from datetime import datetime
from typing import Any, Dict, Optional

import attrs

from src.platform.exception.exceptions import ValidationError


@attrs.define
class UserEntity:
    """Local mirror of an identity-provider user, used for addressing emails."""

    id: str
    name: str = ''
    email: str = ''
    image: str = ''
    created_at: Optional[datetime] = None

    @classmethod
    def from_identity_payload(cls, data: Dict[str, Any]) -> 'UserEntity':
        """
        Build from the identity provider's user object:
        {id, first_name, last_name, email_addresses: [{email_address}], image_url}
        """
        user_id = data.get('id')
        if not user_id:
            raise ValidationError('User payload is missing id')

        emails = data.get('email_addresses') or []
        email = emails[0].get('email_address', '') if emails else ''
        name = ' '.join(part for part in (data.get('first_name'), data.get('last_name')) if part)

        return cls(id=str(user_id), name=name, email=email, image=data.get('image_url') or '')


@attrs.define(frozen=True)
class AuthenticatedUser:
    """Caller identity taken from a verified bearer token (no DB query)."""

    id: str
    email: str = ''
    name: str = ''
    is_admin: bool = False
