"""Prometheus metrics for the radio service."""
from prometheus_client import Counter, Gauge

radio_player_actions_total = Counter(
    'radio_player_actions_total',
    'Play and pause actions applied to a station player',
    ['radio_id', 'action']
)

radio_vetoes_total = Counter(
    'radio_vetoes_total',
    'Vetoes recorded against a station\'s current track',
    ['radio_id']
)

radio_stale_requests_total = Counter(
    'radio_stale_requests_total',
    'Requests rejected because they targeted a track that is not current',
    ['radio_id', 'action']
)

playlist_refills_total = Counter(
    'playlist_refills_total',
    'DJ runs that refilled a playlist',
    ['radio_id']
)

playlist_tracks_added_total = Counter(
    'playlist_tracks_added_total',
    'Tracks appended to playlists by the DJ',
    ['radio_id']
)

playlist_size = Gauge(
    'playlist_size',
    'Number of tracks queued in a station playlist',
    ['radio_id']
)

kafka_messages_produced = Counter(
    'kafka_messages_produced_total',
    'Messages handed to the Kafka producer',
    ['topic']
)
