from abc import ABC, abstractmethod

from src.service.shared_kernel.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def upsert(self, *, user: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def delete(self, *, user_id: str) -> bool:
        pass
