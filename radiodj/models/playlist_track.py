"""PlaylistTrack junction model."""
from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class PlaylistTrack(Base, UUIDMixin, TimestampMixin):
    """Junction model linking playlists to tracks with ordering."""

    __tablename__ = "playlist_tracks"

    playlist_id = Column(Uuid(as_uuid=True), ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    track_id = Column(Uuid(as_uuid=True), ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # A track is queued at most once per playlist
    __table_args__ = (
        UniqueConstraint('playlist_id', 'track_id', name='uq_playlist_track'),
    )

    playlist = relationship("Playlist", back_populates="playlist_tracks")
    track = relationship("Track", back_populates="playlist_tracks")

    def __repr__(self) -> str:
        return f"<PlaylistTrack(id={self.id}, playlist_id={self.playlist_id}, track_id={self.track_id}, position={self.position})>"
