"""Pytest configuration for the radio service tests.

Points the service at a throwaway SQLite file before any application module
is imported, then seeds a station the way listeners find it mid-broadcast.
"""

import asyncio
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

_db_dir = tempfile.mkdtemp(prefix="radiodj-tests-")
os.environ["RADIODJ_DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_db_dir) / 'test.db'}"
os.environ["RADIODJ_KAFKA_ENABLED"] = "false"
os.environ["RADIODJ_LOG_FORMAT"] = "console"

import pytest
from fastapi.testclient import TestClient

from radiodj.core.db import SessionLocal, drop_db, init_db
from radiodj.main import app
from radiodj.models import DJ, Playlist, PlaylistTrack, RadioApp, Track, User, Veto
from radiodj.services.station_context import station_registry

LIBRARY_SIZE = 40
QUEUED_TRACKS = 24


def run(coro):
    """Run a coroutine to completion from synchronous test code."""
    return asyncio.run(coro)


@dataclass
class Seed:
    """Ids of the seeded fixtures."""
    radio_id: object
    playlist_id: object
    user_id: object
    other_user_id: object
    current_track_id: object
    next_track_id: object
    queued_track_ids: List[object] = field(default_factory=list)
    library_track_ids: List[object] = field(default_factory=list)


async def _seed() -> Seed:
    async with SessionLocal() as session:
        tracks = [
            Track(
                title=f"Track {index:04d}",
                artist=f"Artist {index % 7}",
                album=f"Album {index % 5}",
                duration_seconds=180 + index,
                file_path=f"/music/track_{index:04d}.mp3",
            )
            for index in range(LIBRARY_SIZE)
        ]
        session.add_all(tracks)

        josh = User(name="Josh", email="josh@example.com")
        anna = User(name="Anna", email="anna@example.com")
        session.add_all([josh, anna])

        radio = RadioApp(name="radio")
        radio.dj = DJ(min_tracks=10, target_tracks=25)
        radio.dj.playlist = Playlist()
        session.add(radio)
        await session.flush()

        queued = tracks[:QUEUED_TRACKS]
        for position, track in enumerate(queued):
            session.add(PlaylistTrack(playlist_id=radio.dj.playlist.id, track_id=track.id, position=position))

        # Josh has already vetoed three tracks that are not queued
        for track in tracks[QUEUED_TRACKS:QUEUED_TRACKS + 3]:
            session.add(Veto(user_id=josh.id, track_id=track.id))

        await session.commit()

        return Seed(
            radio_id=radio.id,
            playlist_id=radio.dj.playlist.id,
            user_id=josh.id,
            other_user_id=anna.id,
            current_track_id=queued[0].id,
            next_track_id=queued[1].id,
            queued_track_ids=[track.id for track in queued],
            library_track_ids=[track.id for track in tracks],
        )


@pytest.fixture
def seed():
    """Fresh schema with one seeded station."""
    run(drop_db())
    run(init_db())
    station_registry.clear()
    return run(_seed())


@pytest.fixture
def client(seed):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(seed):
    return {"X-User-Id": str(seed.user_id)}


@pytest.fixture
def db_call():
    """Run ``fn(session)`` in its own session and return the result."""
    def _call(fn):
        async def _run():
            async with SessionLocal() as session:
                return await fn(session)
        return run(_run())
    return _call
