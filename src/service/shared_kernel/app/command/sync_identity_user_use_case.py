from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface import IUserCommandRepo
from src.service.shared_kernel.domain.entity.user_entity import UserEntity


class SyncIdentityUserUseCase:
    """Mirror identity-provider user lifecycle events into the local user table."""

    def __init__(self, *, user_command_repo: IUserCommandRepo) -> None:
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo)

    @Logger.io
    async def handle_event(self, *, event_type: str, data: Dict[str, Any]) -> None:
        if event_type in ('user.created', 'user.updated'):
            user = await self.user_command_repo.upsert(
                user=UserEntity.from_identity_payload(data)
            )
            Logger.base.info(f'👤 [USER-SYNC] {event_type}: {user.id}')
        elif event_type == 'user.deleted':
            if not data.get('id'):
                raise ValidationError('User payload is missing id')
            deleted = await self.user_command_repo.delete(user_id=str(data['id']))
            Logger.base.info(f'👤 [USER-SYNC] user.deleted: {data["id"]} (existed={deleted})')
        else:
            Logger.base.info(f'👤 [USER-SYNC] Ignoring event type {event_type}')
