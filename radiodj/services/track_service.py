"""Track service for the station library."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError
from ..core.logging import get_logger
from ..models import Track

logger = get_logger(__name__)


class TrackService:
    """Service for managing library tracks."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_track_by_id(self, track_id: UUID) -> Optional[Track]:
        """Get a track by ID."""
        query = select(Track).where(Track.id == track_id)

        result = await self.db.execute(query)
        track = result.scalar_one_or_none()

        if track:
            logger.debug("retrieved_track", track_id=str(track_id), track_title=track.title)
        else:
            logger.warning("track_not_found", track_id=str(track_id))

        return track

    async def list_tracks(self, limit: int = 100, offset: int = 0) -> List[Track]:
        """List library tracks ordered by artist and title."""
        query = select(Track).order_by(Track.artist, Track.title).limit(limit).offset(offset)

        result = await self.db.execute(query)
        tracks = result.scalars().all()

        logger.info("listed_tracks", count=len(tracks), limit=limit, offset=offset)
        return list(tracks)

    async def search_tracks(self, query_text: str, limit: int = 50) -> List[Track]:
        """Search tracks by title or artist."""
        pattern = f"%{query_text.strip()}%"
        query = select(Track).where(Track.title.ilike(pattern) | Track.artist.ilike(pattern))
        query = query.order_by(Track.artist, Track.title).limit(limit)

        result = await self.db.execute(query)
        tracks = result.scalars().all()

        logger.info("searched_tracks", query=query_text, count=len(tracks))
        return list(tracks)

    async def add_track(
        self,
        title: str,
        file_path: str,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        duration_seconds: int = 0,
    ) -> Track:
        """Add a track to the library."""
        existing = await self.db.execute(select(Track).where(Track.file_path == file_path))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(
                message=f"Track with file {file_path} already exists",
                details={"file_path": file_path},
            )

        track = Track(
            title=title,
            artist=artist,
            album=album,
            duration_seconds=duration_seconds,
            file_path=file_path,
        )
        self.db.add(track)
        await self.db.commit()

        logger.info("track_added", track_id=str(track.id), title=title, artist=artist)
        return track
