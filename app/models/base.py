"""Base Models and Mixins shared by every table"""

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - integer autoincrement primary key
    - created_at / updated_at timestamps
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class PublishableMixin:
    """
    Mixin for rows that are only visible once published.

    Provides:
    - published_at timestamp (NULL = draft, NOT NULL = published)
    """
    published_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_published(self) -> bool:
        return self.published_at is not None


class ActorMixin:
    """
    Mixin recording who created and last touched a row.

    Provides:
    - created_by_id / updated_by_id (user ids supplied by the caller)
    - locale
    """
    created_by_id = Column(Integer, nullable=True)
    updated_by_id = Column(Integer, nullable=True)
    locale = Column(String(10), nullable=True)
