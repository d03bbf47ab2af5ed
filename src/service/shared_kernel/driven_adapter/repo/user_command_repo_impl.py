from typing import AsyncContextManager, Callable

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface import IUserCommandRepo
from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def upsert(self, *, user: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            values = {'id': user.id, 'name': user.name, 'email': user.email, 'image': user.image}
            stmt = (
                insert(UserModel)
                .values(**values)
                .on_conflict_do_update(
                    index_elements=[UserModel.id],
                    set_={'name': user.name, 'email': user.email, 'image': user.image},
                )
                .returning(UserModel)
            )
            user_model = (await session.execute(stmt)).scalar_one()
            await session.commit()
            return UserEntity(
                id=user_model.id,
                name=user_model.name,
                email=user_model.email,
                image=user_model.image,
                created_at=user_model.created_at,
            )

    @Logger.io
    async def delete(self, *, user_id: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(UserModel).where(UserModel.id == user_id))
            await session.commit()
            return result.rowcount > 0
