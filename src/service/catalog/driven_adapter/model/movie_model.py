from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[str] = mapped_column(String(32), primary_key=True)  # metadata-provider id
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    overview: Mapped[str] = mapped_column(Text, nullable=False, default='')
    poster_path: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    backdrop_path: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    genres: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    casts: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    release_date: Mapped[str] = mapped_column(String(10), nullable=False, default='')
    original_language: Mapped[str] = mapped_column(String(8), nullable=False, default='')
    tagline: Mapped[str] = mapped_column(String(512), nullable=False, default='')
    vote_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
