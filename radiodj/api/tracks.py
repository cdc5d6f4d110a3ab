"""Library track endpoints."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.db import get_db
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..services.track_service import TrackService
from ..services.veto_service import VetoService

logger = get_logger(__name__)

router = APIRouter(prefix="/tracks", tags=["library"])


class TrackCreateRequest(BaseModel):
    """Library ingest request."""
    title: str = Field(..., min_length=1, max_length=255)
    artist: Optional[str] = Field(None, max_length=255)
    album: Optional[str] = Field(None, max_length=255)
    duration_seconds: int = Field(0, ge=0)
    file_path: str = Field(..., min_length=1, max_length=512, description="Path to the audio file")


class TrackResponse(BaseModel):
    """Track response model."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str = Field(..., description="Track title")
    artist: Optional[str] = Field(None, description="Artist name")
    album: Optional[str] = Field(None, description="Album name")
    duration_seconds: int = Field(..., ge=0, description="Track duration in seconds")
    file_path: str = Field(..., description="Path to audio file")
    play_count: int = Field(0, ge=0)


class VetoResponse(BaseModel):
    """A veto of a track."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    track_id: UUID


@router.get("", response_model=List[TrackResponse])
async def list_tracks(
    q: Optional[str] = Query(None, description="Search title or artist", max_length=255),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> List[TrackResponse]:
    """List or search library tracks."""
    service = TrackService(db)
    if q and q.strip():
        tracks = await service.search_tracks(q, limit=limit)
    else:
        tracks = await service.list_tracks(limit=limit, offset=offset)
    return [TrackResponse.model_validate(track) for track in tracks]


@router.post("", response_model=TrackResponse, status_code=status.HTTP_201_CREATED)
async def add_track(
    body: TrackCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> TrackResponse:
    """Add a track to the library."""
    track = await TrackService(db).add_track(
        title=body.title,
        file_path=body.file_path,
        artist=body.artist,
        album=body.album,
        duration_seconds=body.duration_seconds,
    )
    return TrackResponse.model_validate(track)


@router.get("/{track_id}/vetoes", response_model=List[VetoResponse])
async def track_vetoes(track_id: UUID, db: AsyncSession = Depends(get_db)) -> List[VetoResponse]:
    """List the vetoes recorded against a track."""
    if await TrackService(db).get_track_by_id(track_id) is None:
        raise NotFoundError(message=f"Track {track_id} not found", details={"track_id": str(track_id)})

    vetoes = await VetoService(db).vetoes_for_track(track_id)
    return [VetoResponse.model_validate(veto) for veto in vetoes]
