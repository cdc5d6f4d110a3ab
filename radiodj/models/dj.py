"""DJ model."""
from sqlalchemy import Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class DJ(Base, UUIDMixin, TimestampMixin):
    """Keeps the station playlist between ``min_tracks`` and ``target_tracks``."""

    __tablename__ = "djs"

    radio_app_id = Column(Uuid(as_uuid=True), ForeignKey("radio_apps.id", ondelete="CASCADE"), nullable=False, unique=True)
    min_tracks = Column(Integer, nullable=False, default=10)
    target_tracks = Column(Integer, nullable=False, default=25)

    radio_app = relationship("RadioApp", back_populates="dj")
    playlist = relationship("Playlist", back_populates="dj", uselist=False, cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<DJ(id={self.id}, radio_app_id={self.radio_app_id}, min_tracks={self.min_tracks})>"
