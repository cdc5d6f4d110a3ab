"""RadioApp model, the station aggregate root."""
import enum

from sqlalchemy import Column, Enum as SQLEnum, String
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class PlayerStatus(str, enum.Enum):
    """Player state."""
    PLAYING = "playing"
    PAUSED = "paused"


class RadioApp(Base, UUIDMixin, TimestampMixin):
    """A radio station: owns one DJ and the player state."""

    __tablename__ = "radio_apps"

    name = Column(String(255), nullable=False, unique=True, index=True)
    player_status = Column(SQLEnum(PlayerStatus), nullable=False, default=PlayerStatus.PAUSED)

    dj = relationship("DJ", back_populates="radio_app", uselist=False, cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<RadioApp(id={self.id}, name='{self.name}', player_status='{self.player_status}')>"
