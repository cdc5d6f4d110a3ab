"""Per-station runtime context: write lock and last player action."""
import asyncio
import enum
from dataclasses import dataclass, field
from typing import Dict, Optional
from uuid import UUID


class PlayerAction(str, enum.Enum):
    """Action last requested of a station's player."""
    PLAY = "play"
    PAUSE = "pause"


@dataclass
class StationContext:
    """Mutable state shared by all requests for one station.

    Holding ``lock`` makes a request the single writer of the station's
    DJ, playlist, player and vetoes.
    """
    radio_id: UUID
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    last_action: Optional[PlayerAction] = None


class StationRegistry:
    """Process-wide map of station id to its context."""

    def __init__(self) -> None:
        self._contexts: Dict[UUID, StationContext] = {}

    def get(self, radio_id: UUID) -> StationContext:
        context = self._contexts.get(radio_id)
        if context is None:
            context = StationContext(radio_id=radio_id)
            self._contexts[radio_id] = context
        return context

    def last_action(self, radio_id: UUID) -> Optional[PlayerAction]:
        context = self._contexts.get(radio_id)
        return context.last_action if context else None

    def clear(self) -> None:
        self._contexts.clear()


station_registry = StationRegistry()
