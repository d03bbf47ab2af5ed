from typing import Any, Dict

from pydantic import BaseModel


class IdentityWebhookRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'type': 'user.created',
                'data': {
                    'id': 'user_2abc',
                    'first_name': 'Ada',
                    'last_name': 'Lovelace',
                    'email_addresses': [{'email_address': 'ada@example.com'}],
                    'image_url': 'https://img.example.com/ada.png',
                },
            }
        }
    }

    type: str
    data: Dict[str, Any]


class SuccessResponse(BaseModel):
    success: bool = True
    message: str = ''
