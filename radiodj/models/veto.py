"""Veto model."""
from sqlalchemy import Column, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.base import Base, TimestampMixin, UUIDMixin


class Veto(Base, UUIDMixin, TimestampMixin):
    """A listener's veto of a track."""

    __tablename__ = "vetoes"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    track_id = Column(Uuid(as_uuid=True), ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'track_id', name='uq_veto_user_track'),
    )

    user = relationship("User", back_populates="vetoes")
    track = relationship("Track", back_populates="vetoes")

    def __repr__(self) -> str:
        return f"<Veto(id={self.id}, user_id={self.user_id}, track_id={self.track_id})>"
