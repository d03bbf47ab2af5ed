from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface import IUserQueryRepo
from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()
            return self._model_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_ids(self, *, user_ids: List[str]) -> List[UserEntity]:
        if not user_ids:
            return []
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id.in_(user_ids)))
            return [self._model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.created_at))
            return [self._model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def count(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.count()).select_from(UserModel))
            return int(result.scalar_one())

    @staticmethod
    def _model_to_entity(user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            name=user_model.name,
            email=user_model.email,
            image=user_model.image,
            created_at=user_model.created_at,
        )
