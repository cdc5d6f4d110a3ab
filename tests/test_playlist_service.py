"""Tests for playlist reads and reshaping."""

from sqlalchemy import delete, select

from radiodj.models import PlaylistTrack, Track, Veto
from radiodj.services.playlist_service import PlaylistService


class TestReads:
    """Test reading the queue."""

    def test_tracks_in_play_order(self, seed, db_call):
        async def _tracks(session):
            return [track.id for track in await PlaylistService(session).tracks(seed.playlist_id)]
        assert db_call(_tracks) == seed.queued_track_ids

    def test_current_track_is_head(self, seed, db_call):
        async def _current(session):
            return (await PlaylistService(session).current_track(seed.playlist_id)).id
        assert db_call(_current) == seed.current_track_id

    def test_current_track_of_empty_playlist(self, seed, db_call):
        async def _current(session):
            await session.execute(delete(PlaylistTrack))
            return await PlaylistService(session).current_track(seed.playlist_id)
        assert db_call(_current) is None

    def test_size(self, seed, db_call):
        async def _size(session):
            return await PlaylistService(session).size(seed.playlist_id)
        assert db_call(_size) == 24


class TestSerializeForClient:
    """Test the client snapshot."""

    def test_entry_shape(self, seed, db_call):
        async def _serialize(session):
            return await PlaylistService(session).serialize_for_client(seed.playlist_id)

        entries = db_call(_serialize)
        assert len(entries) == 24
        assert entries[0] == {
            "id": str(seed.current_track_id),
            "title": "Track 0000",
            "artist": "Artist 0",
            "album": "Album 0",
            "duration_seconds": 180,
            "position": 0,
            "vetoes": 0,
        }

    def test_counts_vetoes(self, seed, db_call):
        async def _serialize(session):
            session.add(Veto(user_id=seed.user_id, track_id=seed.next_track_id))
            session.add(Veto(user_id=seed.other_user_id, track_id=seed.next_track_id))
            await session.flush()
            return await PlaylistService(session).serialize_for_client(seed.playlist_id)

        entries = db_call(_serialize)
        assert entries[1]["id"] == str(seed.next_track_id)
        assert entries[1]["vetoes"] == 2

    def test_positions_are_contiguous_after_removal(self, seed, db_call):
        async def _serialize(session):
            service = PlaylistService(session)
            await service.remove_track(seed.playlist_id, seed.queued_track_ids[5])
            return await service.serialize_for_client(seed.playlist_id)

        entries = db_call(_serialize)
        assert [entry["position"] for entry in entries] == list(range(23))


class TestReshape:
    """Test appending, removing and advancing."""

    def test_append_goes_after_tail(self, seed, db_call):
        async def _append(session):
            service = PlaylistService(session)
            extra = (await session.execute(
                select(Track).where(Track.id.not_in(seed.queued_track_ids)).order_by(Track.title).limit(2)
            )).scalars().all()
            added = await service.append_tracks(seed.playlist_id, extra)
            tracks = await service.tracks(seed.playlist_id)
            return added, [track.id for track in extra], [track.id for track in tracks]

        added, extra_ids, queued = db_call(_append)
        assert added == 2
        assert queued[-2:] == extra_ids
        assert queued[:24] == seed.queued_track_ids

    def test_append_to_empty_playlist_starts_at_zero(self, seed, db_call):
        async def _append(session):
            await session.execute(delete(PlaylistTrack))
            service = PlaylistService(session)
            track = await session.get(Track, seed.current_track_id)
            await service.append_tracks(seed.playlist_id, [track])
            entries = await service.get_entries(seed.playlist_id)
            return [entry.position for entry in entries]

        assert db_call(_append) == [0]

    def test_remove_track(self, seed, db_call):
        async def _remove(session):
            service = PlaylistService(session)
            removed = await service.remove_track(seed.playlist_id, seed.current_track_id)
            again = await service.remove_track(seed.playlist_id, seed.current_track_id)
            current = await service.current_track(seed.playlist_id)
            return removed, again, current.id

        assert db_call(_remove) == (True, False, seed.next_track_id)

    def test_advance_records_play(self, seed, db_call):
        async def _advance(session):
            service = PlaylistService(session)
            current = await service.advance(seed.playlist_id)
            finished = await session.get(Track, seed.current_track_id)
            return current.id, finished.play_count, finished.last_played_at, await service.size(seed.playlist_id)

        current_id, play_count, last_played_at, size = db_call(_advance)
        assert current_id == seed.next_track_id
        assert play_count == 1
        assert last_played_at is not None
        assert size == 23

    def test_advance_empty_playlist(self, seed, db_call):
        async def _advance(session):
            await session.execute(delete(PlaylistTrack))
            return await PlaylistService(session).advance(seed.playlist_id)

        assert db_call(_advance) is None
