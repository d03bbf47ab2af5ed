import uuid

from uuid_utils import UUID


def to_pg_uuid(value: UUID | uuid.UUID | str) -> uuid.UUID:
    """asyncpg binds stdlib UUIDs only"""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
