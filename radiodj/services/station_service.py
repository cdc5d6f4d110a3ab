"""Radio station service for managing stations."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import app_settings
from ..core.exceptions import ConflictError, ValidationError
from ..core.logging import get_logger
from ..models import DJ, Playlist, RadioApp

logger = get_logger(__name__)


class RadioStationService:
    """Service for managing radio stations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    def _with_dj(self, query):
        return query.options(selectinload(RadioApp.dj).selectinload(DJ.playlist))

    async def get_all_stations(self) -> List[RadioApp]:
        """Get all radio stations ordered by name."""
        query = self._with_dj(select(RadioApp).order_by(RadioApp.name))

        result = await self.db.execute(query)
        stations = result.scalars().all()

        logger.info("retrieved_stations", count=len(stations))
        return list(stations)

    async def get_station_by_id(self, station_id: UUID) -> Optional[RadioApp]:
        """Get a radio station by ID, with its DJ and playlist loaded."""
        query = self._with_dj(select(RadioApp).where(RadioApp.id == station_id))

        result = await self.db.execute(query)
        station = result.scalar_one_or_none()

        if station:
            logger.debug("retrieved_station", station_id=str(station_id), station_name=station.name)
        else:
            logger.warning("station_not_found", station_id=str(station_id))

        return station

    async def get_station_by_name(self, name: str) -> Optional[RadioApp]:
        query = self._with_dj(select(RadioApp).where(RadioApp.name == name))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create_station(
        self,
        name: str,
        min_tracks: Optional[int] = None,
        target_tracks: Optional[int] = None,
    ) -> RadioApp:
        """Create a station together with its DJ and empty playlist."""
        min_tracks = min_tracks or app_settings.min_playlist_tracks
        target_tracks = target_tracks or app_settings.target_playlist_tracks

        if target_tracks < min_tracks:
            raise ValidationError(
                message="target_tracks must not be smaller than min_tracks",
                details={"min_tracks": min_tracks, "target_tracks": target_tracks},
            )

        if await self.get_station_by_name(name) is not None:
            raise ConflictError(message=f"Station {name} already exists", details={"name": name})

        station = RadioApp(name=name)
        station.dj = DJ(min_tracks=min_tracks, target_tracks=target_tracks)
        station.dj.playlist = Playlist()
        self.db.add(station)
        await self.db.commit()

        logger.info(
            "station_created",
            station_id=str(station.id),
            station_name=name,
            min_tracks=min_tracks,
            target_tracks=target_tracks,
        )
        return station
