"""Playlist service: the ordered queue a station plays from."""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.logging import get_logger
from ..models import PlaylistTrack, Track, Veto

logger = get_logger(__name__)


class PlaylistService:
    """Service for reading and reshaping a playlist.

    The entry with the lowest position is the current track. Positions only
    grow, so removals leave gaps and never reorder the queue.
    """

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_entries(self, playlist_id: UUID) -> List[PlaylistTrack]:
        """Get playlist entries in play order, with their tracks loaded."""
        query = select(PlaylistTrack).where(PlaylistTrack.playlist_id == playlist_id)
        query = query.order_by(PlaylistTrack.position)
        query = query.options(selectinload(PlaylistTrack.track))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def tracks(self, playlist_id: UUID) -> List[Track]:
        """Get queued tracks in play order."""
        entries = await self.get_entries(playlist_id)
        return [entry.track for entry in entries]

    async def size(self, playlist_id: UUID) -> int:
        query = select(func.count(PlaylistTrack.id)).where(PlaylistTrack.playlist_id == playlist_id)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def current_track(self, playlist_id: UUID) -> Optional[Track]:
        """Get the head of the queue, or None when the playlist is empty."""
        query = select(Track).join(PlaylistTrack).where(PlaylistTrack.playlist_id == playlist_id)
        query = query.order_by(PlaylistTrack.position).limit(1)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def veto_counts(self, track_ids: Iterable[UUID]) -> Dict[UUID, int]:
        """Count vetoes per track."""
        track_ids = list(track_ids)
        if not track_ids:
            return {}

        query = select(Veto.track_id, func.count(Veto.id)).where(Veto.track_id.in_(track_ids))
        query = query.group_by(Veto.track_id)

        result = await self.db.execute(query)
        return {track_id: count for track_id, count in result.all()}

    async def serialize_for_client(self, playlist_id: UUID) -> List[Dict[str, Any]]:
        """Snapshot of the queue for polling clients."""
        entries = await self.get_entries(playlist_id)
        vetoes = await self.veto_counts(entry.track_id for entry in entries)

        return [
            {
                "id": str(entry.track.id),
                "title": entry.track.title,
                "artist": entry.track.artist,
                "album": entry.track.album,
                "duration_seconds": entry.track.duration_seconds,
                "position": index,
                "vetoes": vetoes.get(entry.track_id, 0),
            }
            for index, entry in enumerate(entries)
        ]

    async def append_tracks(self, playlist_id: UUID, tracks: Iterable[Track]) -> int:
        """Append tracks after the current tail. Returns how many were added."""
        query = select(func.max(PlaylistTrack.position)).where(PlaylistTrack.playlist_id == playlist_id)
        result = await self.db.execute(query)
        tail = result.scalar_one_or_none()
        next_position = 0 if tail is None else tail + 1

        added = 0
        for track in tracks:
            self.db.add(PlaylistTrack(playlist_id=playlist_id, track_id=track.id, position=next_position))
            next_position += 1
            added += 1

        await self.db.flush()
        logger.info("playlist_tracks_appended", playlist_id=str(playlist_id), count=added)
        return added

    async def remove_track(self, playlist_id: UUID, track_id: UUID) -> bool:
        """Remove a track from the queue. Returns False if it was not queued."""
        statement = delete(PlaylistTrack).where(
            PlaylistTrack.playlist_id == playlist_id,
            PlaylistTrack.track_id == track_id,
        )
        result = await self.db.execute(statement)
        removed = result.rowcount > 0

        if removed:
            logger.info("playlist_track_removed", playlist_id=str(playlist_id), track_id=str(track_id))
        else:
            logger.warning("playlist_track_not_queued", playlist_id=str(playlist_id), track_id=str(track_id))
        return removed

    async def advance(self, playlist_id: UUID) -> Optional[Track]:
        """Drop the finished head of the queue and record its play.

        Returns the new current track.
        """
        finished = await self.current_track(playlist_id)
        if finished is None:
            logger.warning("playlist_advance_on_empty", playlist_id=str(playlist_id))
            return None

        finished.play_count = (finished.play_count or 0) + 1
        finished.last_played_at = datetime.utcnow()
        await self.db.flush()
        await self.remove_track(playlist_id, finished.id)

        current = await self.current_track(playlist_id)
        logger.info(
            "playlist_advanced",
            playlist_id=str(playlist_id),
            finished_track_id=str(finished.id),
            current_track_id=str(current.id) if current else None,
        )
        return current
