"""User model for listeners."""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """A listener of the station."""

    __tablename__ = "users"

    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True)

    # Profile picture metadata; the file itself is stored elsewhere
    picture_file_name = Column(String(255), nullable=True)
    picture_content_type = Column(String(100), nullable=True)
    picture_file_size = Column(Integer, nullable=True)

    vetoes = relationship("Veto", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
