from datetime import datetime
import uuid

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ShowModel(Base):
    __tablename__ = 'show'
    __table_args__ = (UniqueConstraint('movie_id', 'show_date_time', name='uq_show_movie_slot'),)

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    movie_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    show_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    show_price: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
