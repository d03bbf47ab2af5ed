from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class UserModel(Base):
    __tablename__ = 'user'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)  # identity-provider id
    name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    email: Mapped[str] = mapped_column(String(255), nullable=False, default='', index=True)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default='')
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f'<UserModel(id={self.id}, email={self.email}, name={self.name})>'
