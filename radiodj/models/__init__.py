"""Models for the radio service."""
from .user import User
from .track import Track
from .radio_app import RadioApp, PlayerStatus
from .dj import DJ
from .playlist import Playlist
from .playlist_track import PlaylistTrack
from .veto import Veto

__all__ = ["User", "Track", "RadioApp", "PlayerStatus", "DJ", "Playlist", "PlaylistTrack", "Veto"]
