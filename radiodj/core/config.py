"""Application settings loaded from the environment."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the radio service.

    Every field can be overridden with a ``RADIODJ_`` prefixed environment
    variable, e.g. ``RADIODJ_DATABASE_URL``.
    """
    model_config = SettingsConfigDict(
        env_prefix="RADIODJ_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "radiodj"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    log_format: str = Field("json", description="json or console")
    api_prefix: str = "/api/v1"

    database_url: str = "sqlite+aiosqlite:///./radiodj.db"
    database_echo: bool = False

    # Header carrying the signed-in listener's id
    auth_header: str = "X-User-Id"

    # Client polling interval returned with full updates
    next_update_seconds: int = Field(5, ge=1)

    # Defaults for newly created DJs
    min_playlist_tracks: int = Field(10, ge=2)
    target_playlist_tracks: int = Field(25, ge=2)
    replay_cooldown_minutes: int = Field(60, ge=0)

    kafka_enabled: bool = False
    kafka_bootstrap_servers: str = "localhost:9092"
    kafka_player_topic: str = "radio.player.actions"
    kafka_retry_backoff_seconds: float = 30.0


app_settings = Settings()
