"""Services for the radio station."""
from .dj_service import DJService
from .player import Player
from .playlist_service import PlaylistService
from .radio_service import ActionResult, Piece, RadioAction, RadioService
from .station_context import PlayerAction, StationContext, StationRegistry, station_registry
from .station_service import RadioStationService
from .track_service import TrackService
from .user_service import UserService
from .veto_service import VetoService

__all__ = [
    "ActionResult",
    "DJService",
    "Piece",
    "Player",
    "PlayerAction",
    "PlaylistService",
    "RadioAction",
    "RadioService",
    "RadioStationService",
    "StationContext",
    "StationRegistry",
    "TrackService",
    "UserService",
    "VetoService",
    "station_registry",
]
