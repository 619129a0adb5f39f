"""Resident accounts and roles (read model for billing cohorts)"""

from sqlalchemy import Column, String, Boolean, Integer, Table, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import BaseModel, PublishableMixin, ActorMixin


# Association table for user <-> role
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True),
)


class Role(BaseModel, PublishableMixin, ActorMixin):
    """Account role; residents carry type "penghuni"."""
    __tablename__ = "roles"

    name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=True)
    type = Column(String(100), nullable=False, index=True)

    users = relationship("User", secondary=user_roles, back_populates="roles")


class User(BaseModel, PublishableMixin, ActorMixin):
    """
    Account billed for estate fees when it holds the resident role.
    Credentials live with the authentication service, not here.
    """
    __tablename__ = "users"

    document_id = Column(String(255), nullable=True)
    username = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    blocked = Column(Boolean, default=False, nullable=False)

    roles = relationship("Role", secondary=user_roles, back_populates="users")

    def __repr__(self) -> str:
        return f"<User {self.id} {self.username}>"
