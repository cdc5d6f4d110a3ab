"""Play/pause state machine for a station's player."""
from typing import Optional

from ..core.logging import get_logger
from ..metrics import radio_player_actions_total
from ..models import PlayerStatus, RadioApp
from ..producers.kafka_producer import publish_player_action
from .station_context import PlayerAction, StationContext

logger = get_logger(__name__)


class Player:
    """Player state of one station.

    ``status`` is persisted on the RadioApp row. A transition only changes the
    row; ``publish`` reports the pending action to the station context,
    metrics and Kafka once the change is committed.
    """

    def __init__(self, radio: RadioApp, context: StationContext):
        self.radio = radio
        self.context = context
        self.pending: Optional[PlayerAction] = None

    def status(self) -> PlayerStatus:
        return self.radio.player_status or PlayerStatus.PAUSED

    def play(self) -> PlayerStatus:
        return self._transition(PlayerAction.PLAY, PlayerStatus.PLAYING)

    def pause(self) -> PlayerStatus:
        return self._transition(PlayerAction.PAUSE, PlayerStatus.PAUSED)

    def _transition(self, action: PlayerAction, new_status: PlayerStatus) -> PlayerStatus:
        previous = self.status()
        self.radio.player_status = new_status
        self.pending = action

        logger.debug(
            "player_transition",
            radio_id=str(self.radio.id),
            action=action.value,
            previous=previous.value,
            status=new_status.value,
        )
        return new_status

    def publish(self) -> Optional[PlayerAction]:
        """Report the pending action. Call after the transition is committed."""
        action = self.pending
        if action is None:
            return None

        self.pending = None
        self.context.last_action = action
        status = self.status()

        radio_player_actions_total.labels(radio_id=str(self.radio.id), action=action.value).inc()
        publish_player_action(radio_id=self.radio.id, action=action.value, status=status.value)

        logger.info("player_action_published", radio_id=str(self.radio.id), action=action.value, status=status.value)
        return action
