"""Radio service: the request flow behind a station's listener actions."""
import enum
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import app_settings
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..metrics import playlist_size, radio_stale_requests_total
from ..models import RadioApp, Track, User
from .dj_service import DJService
from .player import Player
from .playlist_service import PlaylistService
from .station_context import StationRegistry, station_registry
from .station_service import RadioStationService
from .track_service import TrackService
from .user_service import UserService
from .veto_service import VetoService

logger = get_logger(__name__)


class Piece(str, enum.Enum):
    """Parts of the update data a client can ask for."""
    PLAYLIST = "playlist"
    PLAYER = "player"
    NEXT_UPDATE_TIME = "next_update_time"


class RadioAction(str, enum.Enum):
    """Listener actions that target the current track."""
    PLAY = "play"
    PAUSE = "pause"
    VETO = "veto"
    FINISH = "finish"


# Update data returned after an action succeeds
ACTION_PIECES = {
    RadioAction.PLAY: (Piece.PLAYLIST, Piece.PLAYER),
    RadioAction.PAUSE: (Piece.PLAYER,),
    RadioAction.VETO: (Piece.PLAYLIST, Piece.PLAYER),
    RadioAction.FINISH: (Piece.PLAYLIST, Piece.PLAYER),
}

# Update data returned when the requested track is no longer current
STALE_PIECES = (Piece.PLAYLIST, Piece.PLAYER)

# Pieces selected by the ``request`` parameter of an update
UPDATE_REQUESTS = {
    "all": (Piece.PLAYLIST, Piece.PLAYER, Piece.NEXT_UPDATE_TIME),
    "player": (Piece.PLAYER, Piece.NEXT_UPDATE_TIME),
    "playlist": (Piece.PLAYLIST, Piece.NEXT_UPDATE_TIME),
}


@dataclass
class ActionResult:
    """Outcome of a listener action.

    ``stale`` is set when the request named a track that is not current; in
    that case nothing was changed. ``track`` is the track the request resolved
    to: the requested one, or the new current track after a veto.
    """
    action: RadioAction
    stale: bool
    track: Optional[Track]
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return 406 if self.stale else 200


class RadioService:
    """Runs listener requests against one station.

    Each request holds the station lock from its first state read to its
    commit, so DJ, playlist, player and veto changes land together. Last
    action, metrics and events are only reported once the commit succeeds.
    """

    def __init__(
        self,
        db: AsyncSession,
        registry: StationRegistry = station_registry,
        rng: Optional[random.Random] = None,
    ):
        """Initialize service with database session."""
        self.db = db
        self.registry = registry
        self.stations = RadioStationService(db)
        self.playlists = PlaylistService(db)
        self.tracks = TrackService(db)
        self.users = UserService(db)
        self.vetoes = VetoService(db)
        self.dj = DJService(db, rng=rng)

    async def get_radio(self, radio_id: UUID) -> RadioApp:
        radio = await self.stations.get_station_by_id(radio_id)
        if radio is None:
            raise NotFoundError(
                message=f"Station {radio_id} not found",
                details={"radio_id": str(radio_id)},
            )
        return radio

    def player(self, radio: RadioApp) -> Player:
        return Player(radio, self.registry.get(radio.id))

    async def snapshot(self, radio: RadioApp, pieces: Iterable[Piece]) -> Dict[str, Any]:
        """Build update data holding only ``pieces``, in a fixed key order."""
        pieces = set(pieces)
        playlist_id = radio.dj.playlist.id
        data: Dict[str, Any] = {}

        if Piece.PLAYLIST in pieces:
            data["playlist"] = await self.playlists.serialize_for_client(playlist_id)

        if Piece.PLAYER in pieces:
            current = await self.playlists.current_track(playlist_id)
            data["player"] = {
                "status": self.player(radio).status().value,
                "current_track": str(current.id) if current else None,
            }

        if Piece.NEXT_UPDATE_TIME in pieces:
            data["next_update_time"] = app_settings.next_update_seconds

        return data

    async def maintain_playlist(self, radio: RadioApp) -> int:
        added = await self.dj.maintain(radio.dj)
        if added:
            size = await self.playlists.size(radio.dj.playlist.id)
            playlist_size.labels(radio_id=str(radio.id)).set(size)
        return added

    async def index(self, radio_id: UUID) -> Tuple[RadioApp, List[User]]:
        """Station landing data: the station and its listeners by name."""
        radio = await self.get_radio(radio_id)

        async with self.registry.get(radio.id).lock:
            await self.maintain_playlist(radio)
            await self.db.commit()

        users = await self.users.by_name()
        return radio, users

    async def update(self, radio_id: UUID, request: str = "all") -> Dict[str, Any]:
        """Snapshot of the station for polling clients."""
        pieces = UPDATE_REQUESTS.get(request, UPDATE_REQUESTS["all"])
        radio = await self.get_radio(radio_id)

        async with self.registry.get(radio.id).lock:
            await self.db.refresh(radio, attribute_names=["player_status"])
            await self.maintain_playlist(radio)
            data = await self.snapshot(radio, pieces)
            await self.db.commit()

        return data

    async def perform(
        self,
        radio_id: UUID,
        action: RadioAction,
        user: User,
        track_id: UUID,
    ) -> ActionResult:
        """Apply ``action`` if ``track_id`` is the station's current track."""
        radio = await self.get_radio(radio_id)
        track = await self.tracks.get_track_by_id(track_id)
        if track is None:
            raise NotFoundError(
                message=f"Track {track_id} not found",
                details={"track_id": str(track_id)},
            )

        async with self.registry.get(radio.id).lock:
            await self.db.refresh(radio, attribute_names=["player_status"])
            playlist_id = radio.dj.playlist.id
            current = await self.playlists.current_track(playlist_id)

            if current is None or current.id != track.id:
                radio_stale_requests_total.labels(radio_id=str(radio.id), action=action.value).inc()
                logger.info(
                    "radio_action_stale",
                    radio_id=str(radio.id),
                    action=action.value,
                    user_id=str(user.id),
                    track_id=str(track.id),
                    current_track_id=str(current.id) if current else None,
                )
                data = await self.snapshot(radio, STALE_PIECES)
                return ActionResult(action=action, stale=True, track=track, data=data)

            player = self.player(radio)
            if action is RadioAction.PLAY:
                player.play()
            elif action is RadioAction.PAUSE:
                player.pause()
            elif action is RadioAction.VETO:
                await self.vetoes.record(radio.id, user, current)
                await self.playlists.remove_track(playlist_id, current.id)
                player.play()
            elif action is RadioAction.FINISH:
                await self.playlists.advance(playlist_id)

            await self.maintain_playlist(radio)

            if action is RadioAction.VETO:
                track = await self.playlists.current_track(playlist_id)

            data = await self.snapshot(radio, ACTION_PIECES[action])
            await self.db.commit()

            player.publish()
            self.vetoes.publish(radio.id)

        logger.info(
            "radio_action_applied",
            radio_id=str(radio.id),
            action=action.value,
            user_id=str(user.id),
            track_id=str(track.id) if track else None,
        )
        return ActionResult(action=action, stale=False, track=track, data=data)
