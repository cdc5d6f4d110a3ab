"""Track model for the station library."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class Track(Base, UUIDMixin, TimestampMixin):
    """A track in the library the DJ picks from."""

    __tablename__ = "tracks"

    title = Column(String(255), nullable=False, index=True)
    artist = Column(String(255), nullable=True, index=True)
    album = Column(String(255), nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)
    file_path = Column(String(512), nullable=False, unique=True)

    play_count = Column(Integer, nullable=False, default=0)
    last_played_at = Column(DateTime, nullable=True)

    vetoes = relationship("Veto", back_populates="track", cascade="all, delete-orphan")
    playlist_tracks = relationship("PlaylistTrack", back_populates="track", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Track(id={self.id}, title='{self.title}', artist='{self.artist}')>"
