"""Radio station management endpoints."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.db import get_db
from ..core.logging import get_logger
from ..models import RadioApp
from ..services.station_service import RadioStationService

logger = get_logger(__name__)

router = APIRouter(prefix="/radio/stations", tags=["radio"])


class StationCreateRequest(BaseModel):
    """Station creation request."""
    name: str = Field(..., min_length=1, max_length=255)
    min_tracks: Optional[int] = Field(None, ge=2, description="Refill below this many queued tracks")
    target_tracks: Optional[int] = Field(None, ge=2, description="Refill up to this many queued tracks")


class StationResponse(BaseModel):
    """Radio station response model."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str = Field(..., description="Station name")
    player_status: str = Field(..., description="playing or paused")
    min_tracks: int
    target_tracks: int
    playlist_id: UUID

    @classmethod
    def from_station(cls, station: RadioApp) -> "StationResponse":
        return cls(
            id=station.id,
            name=station.name,
            player_status=station.player_status.value,
            min_tracks=station.dj.min_tracks,
            target_tracks=station.dj.target_tracks,
            playlist_id=station.dj.playlist.id,
        )


@router.get("", response_model=List[StationResponse])
async def list_stations(db: AsyncSession = Depends(get_db)) -> List[StationResponse]:
    """List all radio stations."""
    stations = await RadioStationService(db).get_all_stations()
    logger.info("stations_listed", count=len(stations))
    return [StationResponse.from_station(station) for station in stations]


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
async def create_station(
    body: StationCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> StationResponse:
    """Create a station with an empty playlist; the DJ fills it on first request."""
    station = await RadioStationService(db).create_station(
        body.name,
        min_tracks=body.min_tracks,
        target_tracks=body.target_tracks,
    )
    return StationResponse.from_station(station)
