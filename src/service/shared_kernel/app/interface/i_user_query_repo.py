from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.shared_kernel.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_ids(self, *, user_ids: List[str]) -> List[UserEntity]:
        pass

    @abstractmethod
    async def list_all(self) -> List[UserEntity]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
