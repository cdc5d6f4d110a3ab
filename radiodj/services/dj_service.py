"""DJ service: keeps a station's playlist topped up from the library."""
import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import app_settings
from ..core.logging import get_logger
from ..metrics import playlist_refills_total, playlist_size, playlist_tracks_added_total
from ..models import DJ, PlaylistTrack, Track, Veto
from .playlist_service import PlaylistService

logger = get_logger(__name__)


def pick_weighted(
    candidates: Sequence[Track],
    weights: Sequence[float],
    count: int,
    rng: random.Random,
) -> List[Track]:
    """Weighted random sample of ``count`` tracks without replacement."""
    pool = list(candidates)
    pool_weights = list(weights)
    picked: List[Track] = []

    while pool and len(picked) < count:
        index = rng.choices(range(len(pool)), weights=pool_weights)[0]
        picked.append(pool.pop(index))
        pool_weights.pop(index)

    return picked


class DJService:
    """Service deciding when and how to refill a playlist.

    A playlist needs a run once it holds fewer than ``dj.min_tracks`` tracks;
    a run fills it back up to ``dj.target_tracks``. Tracks that were played or
    vetoed within the replay cooldown are only used when nothing else is left,
    and vetoed tracks come back less often (weight ``1 / (1 + vetoes)``).
    """

    def __init__(
        self,
        db: AsyncSession,
        rng: Optional[random.Random] = None,
        replay_cooldown: Optional[timedelta] = None,
    ):
        """Initialize service with database session."""
        self.db = db
        self.rng = rng or random.Random()
        if replay_cooldown is None:
            replay_cooldown = timedelta(minutes=app_settings.replay_cooldown_minutes)
        self.replay_cooldown = replay_cooldown
        self.playlists = PlaylistService(db)

    async def need_to_run(self, dj: DJ) -> bool:
        size = await self.playlists.size(dj.playlist.id)
        return size < dj.min_tracks

    async def run(self, dj: DJ) -> int:
        """Refill the playlist up to the DJ's target size.

        Returns the number of tracks added.
        """
        playlist_id = dj.playlist.id
        radio_id = str(dj.radio_app_id)

        size = await self.playlists.size(playlist_id)
        wanted = dj.target_tracks - size
        if wanted <= 0:
            return 0

        fresh, cooled = await self._candidates(playlist_id)
        picked = await self._pick(fresh, wanted)
        if len(picked) < wanted and cooled:
            picked += await self._pick(cooled, wanted - len(picked))

        added = await self.playlists.append_tracks(playlist_id, picked)

        playlist_refills_total.labels(radio_id=radio_id).inc()
        playlist_tracks_added_total.labels(radio_id=radio_id).inc(added)
        playlist_size.labels(radio_id=radio_id).set(size + added)

        if added < wanted:
            logger.warning(
                "dj_library_exhausted",
                radio_id=radio_id,
                wanted=wanted,
                added=added,
            )

        logger.info("dj_run_completed", radio_id=radio_id, previous_size=size, added=added)
        return added

    async def maintain(self, dj: DJ) -> int:
        """Run the DJ if the playlist has dropped below its minimum."""
        if not await self.need_to_run(dj):
            return 0
        return await self.run(dj)

    async def _candidates(self, playlist_id: UUID) -> Tuple[List[Track], List[Track]]:
        """Split unqueued library tracks into (fresh, cooled down) lists."""
        queued = select(PlaylistTrack.track_id).where(PlaylistTrack.playlist_id == playlist_id)
        query = select(Track).where(Track.id.not_in(queued)).order_by(Track.created_at, Track.title)

        result = await self.db.execute(query)
        tracks = list(result.scalars().all())

        cutoff = datetime.utcnow() - self.replay_cooldown
        recently_vetoed_query = select(Veto.track_id).where(Veto.created_at >= cutoff)
        recently_vetoed = set((await self.db.execute(recently_vetoed_query)).scalars().all())

        fresh, cooled = [], []
        for track in tracks:
            recently_played = track.last_played_at is not None and track.last_played_at >= cutoff
            if recently_played or track.id in recently_vetoed:
                cooled.append(track)
            else:
                fresh.append(track)
        return fresh, cooled

    async def _pick(self, candidates: List[Track], count: int) -> List[Track]:
        if not candidates or count <= 0:
            return []

        vetoes = await self.playlists.veto_counts(track.id for track in candidates)
        weights = [1.0 / (1 + vetoes.get(track.id, 0)) for track in candidates]
        return pick_weighted(candidates, weights, count, self.rng)
