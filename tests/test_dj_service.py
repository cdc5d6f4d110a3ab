"""Tests for the DJ: when it runs and what it queues."""

import random
from datetime import datetime, timedelta

import pytest
from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from radiodj.models import DJ, PlaylistTrack, Track, Veto
from radiodj.services.dj_service import DJService, pick_weighted
from radiodj.services.playlist_service import PlaylistService


async def load_dj(session, seed):
    query = select(DJ).where(DJ.radio_app_id == seed.radio_id).options(selectinload(DJ.playlist))
    return (await session.execute(query)).scalar_one()


async def keep_only(session, seed, track_ids):
    await session.execute(
        delete(PlaylistTrack).where(
            PlaylistTrack.playlist_id == seed.playlist_id,
            PlaylistTrack.track_id.not_in(track_ids),
        )
    )
    await session.flush()


class TestPickWeighted:
    """Test weighted sampling without replacement."""

    def test_never_picks_twice(self):
        picked = pick_weighted(list(range(10)), [1.0] * 10, 10, random.Random(1))
        assert sorted(picked) == list(range(10))

    def test_stops_when_pool_is_empty(self):
        picked = pick_weighted(["a", "b"], [1.0, 1.0], 5, random.Random(1))
        assert sorted(picked) == ["a", "b"]

    def test_prefers_heavier_candidates(self):
        rng = random.Random(42)
        first_picks = [pick_weighted(["light", "heavy"], [1.0, 50.0], 1, rng)[0] for _ in range(200)]
        assert first_picks.count("heavy") > first_picks.count("light")

    def test_zero_count(self):
        assert pick_weighted(["a"], [1.0], 0, random.Random(1)) == []


class TestNeedToRun:
    """Test the refill threshold."""

    def test_full_playlist_does_not_need_run(self, seed, db_call):
        async def _check(session):
            return await DJService(session).need_to_run(await load_dj(session, seed))
        assert db_call(_check) is False

    def test_single_track_needs_run(self, seed, db_call):
        async def _check(session):
            await keep_only(session, seed, [seed.current_track_id])
            return await DJService(session).need_to_run(await load_dj(session, seed))
        assert db_call(_check) is True

    def test_threshold_is_min_tracks(self, seed, db_call):
        async def _check(session):
            dj = await load_dj(session, seed)
            await keep_only(session, seed, seed.queued_track_ids[:dj.min_tracks])
            at_min = await DJService(session).need_to_run(dj)
            await keep_only(session, seed, seed.queued_track_ids[:dj.min_tracks - 1])
            below_min = await DJService(session).need_to_run(dj)
            return at_min, below_min
        assert db_call(_check) == (False, True)


class TestRun:
    """Test refilling the playlist."""

    def test_fills_up_to_target(self, seed, db_call):
        async def _run(session):
            await keep_only(session, seed, [seed.current_track_id])
            dj = await load_dj(session, seed)
            added = await DJService(session, rng=random.Random(7)).run(dj)
            tracks = await PlaylistService(session).tracks(seed.playlist_id)
            return added, [track.id for track in tracks]

        added, queued = db_call(_run)
        assert added == 24
        assert len(queued) == 25
        assert len(set(queued)) == 25

    def test_keeps_current_track_at_head(self, seed, db_call):
        async def _run(session):
            await keep_only(session, seed, [seed.current_track_id])
            await DJService(session, rng=random.Random(7)).run(await load_dj(session, seed))
            return (await PlaylistService(session).current_track(seed.playlist_id)).id

        assert db_call(_run) == seed.current_track_id

    def test_does_nothing_at_target(self, seed, db_call):
        async def _run(session):
            dj = await load_dj(session, seed)
            dj.target_tracks = 24
            return await DJService(session).run(dj)

        assert db_call(_run) == 0

    def test_maintain_skips_healthy_playlist(self, seed, db_call):
        async def _run(session):
            return await DJService(session).maintain(await load_dj(session, seed))

        assert db_call(_run) == 0

    def test_skips_recently_vetoed_tracks_when_possible(self, seed, db_call):
        async def _run(session):
            await keep_only(session, seed, [seed.current_track_id])
            await DJService(session, rng=random.Random(3)).run(await load_dj(session, seed))
            queued = {track.id for track in await PlaylistService(session).tracks(seed.playlist_id)}
            vetoed = set((await session.execute(select(Veto.track_id))).scalars().all())
            return queued, vetoed

        queued, vetoed = db_call(_run)
        assert vetoed
        assert not queued & vetoed

    def test_falls_back_to_cooled_down_tracks(self, seed, db_call):
        async def _run(session):
            await keep_only(session, seed, [])
            now = datetime.utcnow()
            for track in (await session.execute(select(Track))).scalars().all():
                track.last_played_at = now
            await session.flush()

            dj = await load_dj(session, seed)
            return await DJService(session, rng=random.Random(5)).run(dj)

        assert db_call(_run) == 25

    def test_cooldown_expires(self, seed, db_call):
        async def _run(session):
            await keep_only(session, seed, [])
            long_ago = datetime.utcnow() - timedelta(days=2)
            for track in (await session.execute(select(Track))).scalars().all():
                track.last_played_at = long_ago
            await session.flush()

            service = DJService(session, replay_cooldown=timedelta(hours=1))
            fresh, cooled = await service._candidates(seed.playlist_id)
            return len(fresh), len(cooled)

        # Only the three vetoed tracks are held back
        assert db_call(_run) == (37, 3)

    def test_reports_exhausted_library(self, seed, db_call):
        async def _run(session):
            dj = await load_dj(session, seed)
            dj.target_tracks = 100
            return await DJService(session, rng=random.Random(1)).run(dj)

        # 40 library tracks, 24 already queued
        assert db_call(_run) == 16

    @pytest.mark.parametrize("seed_value", [1, 2, 3])
    def test_same_seed_same_picks(self, seed, db_call, seed_value):
        async def _picks(session):
            await keep_only(session, seed, [seed.current_track_id])
            await DJService(session, rng=random.Random(seed_value)).run(await load_dj(session, seed))
            tracks = await PlaylistService(session).tracks(seed.playlist_id)
            # Rollback expires loaded rows, so read the ids first
            ids = [track.id for track in tracks]
            await session.rollback()
            return ids

        assert db_call(_picks) == db_call(_picks)
