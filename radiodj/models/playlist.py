"""Playlist model."""
from sqlalchemy import Column, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class Playlist(Base, UUIDMixin, TimestampMixin):
    """The queue a DJ plays from; the lowest position is the current track."""

    __tablename__ = "playlists"

    dj_id = Column(Uuid(as_uuid=True), ForeignKey("djs.id", ondelete="CASCADE"), nullable=False, unique=True)

    dj = relationship("DJ", back_populates="playlist")
    playlist_tracks = relationship(
        "PlaylistTrack",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistTrack.position",
    )

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, dj_id={self.dj_id})>"
