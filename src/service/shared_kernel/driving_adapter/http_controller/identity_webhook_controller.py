import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.command.sync_identity_user_use_case import (
    SyncIdentityUserUseCase,
)
from src.service.shared_kernel.driving_adapter.http_controller.schema.identity_webhook_schema import (
    IdentityWebhookRequest,
    SuccessResponse,
)


router = APIRouter()


def verify_webhook_secret(x_webhook_secret: Optional[str] = Header(None)) -> None:
    expected = settings.IDENTITY_WEBHOOK_SECRET.get_secret_value()
    if not x_webhook_secret or not hmac.compare_digest(x_webhook_secret, expected):
        raise AuthenticationError('Invalid webhook secret')


@router.post('/identity', dependencies=[Depends(verify_webhook_secret)])
@Logger.io
async def identity_webhook(
    request: IdentityWebhookRequest,
    use_case: SyncIdentityUserUseCase = Depends(SyncIdentityUserUseCase.depends),
) -> SuccessResponse:
    await use_case.handle_event(event_type=request.type, data=request.data)
    return SuccessResponse(message=f'{request.type} processed')
