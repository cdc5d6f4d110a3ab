"""Kafka producer for station events."""
import json
import time
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from kafka import KafkaProducer
from kafka.errors import KafkaError

from ..core.config import app_settings
from ..core.logging import get_logger
from ..metrics import kafka_messages_produced

logger = get_logger(__name__)

VETO_TOPIC = "radio.vetoes"

# Global producer instance (singleton pattern)
_producer: Optional[KafkaProducer] = None

# Monotonic time before which no new connection is attempted
_retry_after: float = 0.0


def get_producer() -> Optional[KafkaProducer]:
    """Get or create Kafka producer instance.

    Returns None while backing off after a failed connection.
    """
    global _producer, _retry_after
    if _producer is not None:
        return _producer

    if time.monotonic() < _retry_after:
        return None

    try:
        _producer = KafkaProducer(
            bootstrap_servers=app_settings.kafka_bootstrap_servers.split(","),
            value_serializer=lambda value: json.dumps(value).encode("utf-8"),
            key_serializer=lambda key: key.encode("utf-8"),
        )
    except KafkaError as e:
        _retry_after = time.monotonic() + app_settings.kafka_retry_backoff_seconds
        logger.error(
            "kafka_producer_connect_failed",
            bootstrap_servers=app_settings.kafka_bootstrap_servers,
            retry_in_seconds=app_settings.kafka_retry_backoff_seconds,
            error=str(e),
        )
        return None

    logger.info("kafka_producer_connected", bootstrap_servers=app_settings.kafka_bootstrap_servers)
    return _producer


def _publish(topic: str, key: str, event: Dict[str, Any]) -> None:
    if not app_settings.kafka_enabled:
        return

    producer = get_producer()
    if producer is None:
        logger.debug("kafka_event_dropped", topic=topic, key=key)
        return

    try:
        producer.send(topic, value=event, key=key)
        kafka_messages_produced.labels(topic=topic).inc()
        logger.debug("kafka_event_published", topic=topic, key=key)
    except Exception as e:
        # Event delivery never breaks a listener request
        logger.error("kafka_event_publish_failed", topic=topic, key=key, error=str(e), exc_info=True)


def publish_player_action(radio_id: UUID, action: str, status: str) -> None:
    """
    Publish a player action event.

    Args:
        radio_id: ID of the station
        action: Requested action (play or pause)
        status: Player status after the action
    """
    # Keyed by station so a station's actions stay ordered
    _publish(
        app_settings.kafka_player_topic,
        key=str(radio_id),
        event={
            "radio_id": str(radio_id),
            "action": action,
            "status": status,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


def publish_veto(radio_id: UUID, track_id: UUID, user_id: UUID) -> None:
    """Publish a veto event."""
    _publish(
        VETO_TOPIC,
        key=str(radio_id),
        event={
            "radio_id": str(radio_id),
            "track_id": str(track_id),
            "user_id": str(user_id),
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


def close_producer() -> None:
    """Close the Kafka producer connection."""
    global _producer
    if _producer:
        _producer.flush()
        _producer.close()
        _producer = None
        logger.info("kafka_producer_closed")
