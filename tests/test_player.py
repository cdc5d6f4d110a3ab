"""Tests for the player state machine."""

import uuid

import pytest
from prometheus_client import REGISTRY

from radiodj.models import PlayerStatus, RadioApp
from radiodj.services.player import Player
from radiodj.services.station_context import PlayerAction, StationContext, StationRegistry


@pytest.fixture
def radio():
    return RadioApp(id=uuid.uuid4(), name="test", player_status=PlayerStatus.PAUSED)


@pytest.fixture
def player(radio):
    return Player(radio, StationContext(radio_id=radio.id))


def played_count(radio, action):
    return REGISTRY.get_sample_value(
        "radio_player_actions_total",
        {"radio_id": str(radio.id), "action": action},
    )


class TestPlayer:
    """Test play/pause transitions."""

    def test_starts_paused(self, player):
        assert player.status() == PlayerStatus.PAUSED
        assert player.context.last_action is None

    def test_unset_status_reads_as_paused(self):
        radio = RadioApp(id=uuid.uuid4(), name="fresh")
        assert Player(radio, StationContext(radio_id=radio.id)).status() == PlayerStatus.PAUSED

    def test_play(self, player, radio):
        assert player.play() == PlayerStatus.PLAYING
        assert player.status() == PlayerStatus.PLAYING
        assert radio.player_status == PlayerStatus.PLAYING
        assert player.pending == PlayerAction.PLAY

    def test_pause_after_play(self, player):
        player.play()
        assert player.pause() == PlayerStatus.PAUSED
        assert player.status() == PlayerStatus.PAUSED
        assert player.pending == PlayerAction.PAUSE

    def test_repeated_play_is_stable(self, player):
        player.play()
        player.play()
        assert player.status() == PlayerStatus.PLAYING
        assert player.pending == PlayerAction.PLAY

    def test_status_does_not_record_action(self, player):
        player.status()
        assert player.pending is None
        assert player.context.last_action is None


class TestPublish:
    """Actions reach the station context and metrics only when published."""

    def test_transition_alone_is_not_reported(self, player, radio):
        player.play()

        assert player.context.last_action is None
        assert played_count(radio, "play") is None

    def test_publish_reports_last_action(self, player, radio):
        player.play()

        assert player.publish() == PlayerAction.PLAY
        assert player.context.last_action == PlayerAction.PLAY
        assert player.pending is None
        assert played_count(radio, "play") == 1.0

    def test_publish_without_transition(self, player, radio):
        assert player.publish() is None
        assert player.context.last_action is None

    def test_publish_is_not_repeated(self, player, radio):
        player.pause()
        player.publish()
        player.publish()

        assert played_count(radio, "pause") == 1.0


class TestStationRegistry:
    """Test per-station contexts."""

    def test_same_station_same_context(self):
        registry = StationRegistry()
        radio_id = uuid.uuid4()
        assert registry.get(radio_id) is registry.get(radio_id)

    def test_stations_are_isolated(self):
        registry = StationRegistry()
        first, second = uuid.uuid4(), uuid.uuid4()
        registry.get(first).last_action = PlayerAction.PLAY

        assert registry.last_action(first) == PlayerAction.PLAY
        assert registry.last_action(second) is None
        assert registry.get(first).lock is not registry.get(second).lock

    def test_clear(self):
        registry = StationRegistry()
        radio_id = uuid.uuid4()
        registry.get(radio_id).last_action = PlayerAction.PAUSE
        registry.clear()
        assert registry.last_action(radio_id) is None
