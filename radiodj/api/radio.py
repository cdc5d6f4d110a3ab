"""Station API endpoints used by listener clients."""
from html import escape
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.db import get_db
from ..core.logging import get_logger
from ..models import User
from ..services.radio_service import ActionResult, RadioAction, RadioService
from .deps import get_current_user

logger = get_logger(__name__)

router = APIRouter(prefix="/radio", tags=["radio"])


class PlaylistEntryResponse(BaseModel):
    """A queued track as shown to clients."""
    id: UUID
    title: str
    artist: Optional[str] = None
    album: Optional[str] = None
    duration_seconds: int = Field(..., ge=0)
    position: int = Field(..., ge=0, description="0 is the current track")
    vetoes: int = Field(0, ge=0)


class PlayerStateResponse(BaseModel):
    """Player status and the track it is on."""
    status: str = Field(..., description="playing or paused")
    current_track: Optional[UUID] = None


class UpdateDataResponse(BaseModel):
    """Update data; only the requested pieces are present."""
    playlist: Optional[List[PlaylistEntryResponse]] = None
    player: Optional[PlayerStateResponse] = None
    next_update_time: Optional[int] = Field(None, description="Seconds until the next poll")


def render_update_data(data: dict, status_code: int = 200) -> JSONResponse:
    """Serialize update data, keeping only the keys that were set."""
    content = UpdateDataResponse.model_validate(data).model_dump(mode="json", exclude_unset=True)
    return JSONResponse(content=content, status_code=status_code)


def render_index(radio, users: List[User]) -> str:
    listeners = "".join(f"<li>{escape(user.name)}</li>" for user in users)
    return (
        "<!DOCTYPE html>"
        f"<html><head><title>{escape(radio.name)}</title></head>"
        f"<body><h1>{escape(radio.name)}</h1>"
        f"<ul class=\"listeners\">{listeners}</ul>"
        "</body></html>"
    )


@router.get("/{radio_id}", response_class=HTMLResponse)
async def index(
    radio_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Station page listing its listeners by name."""
    radio, users = await RadioService(db).index(radio_id)
    logger.info("station_index_rendered", radio_id=str(radio_id), listener_count=len(users))
    return HTMLResponse(content=render_index(radio, users))


@router.get("/{radio_id}/update", response_model=UpdateDataResponse, response_model_exclude_unset=True)
async def update(
    radio_id: UUID,
    request: str = Query("all", description="all, player or playlist"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Poll the station state."""
    data = await RadioService(db).update(radio_id, request)
    logger.debug("station_update_served", radio_id=str(radio_id), user_id=str(user.id), request=request)
    return render_update_data(data)


async def _perform(
    action: RadioAction,
    radio_id: UUID,
    track_id: UUID,
    user: User,
    db: AsyncSession,
) -> JSONResponse:
    result: ActionResult = await RadioService(db).perform(radio_id, action, user, track_id)
    return render_update_data(result.data, status_code=result.status_code)


@router.get("/{radio_id}/play", responses={406: {"model": UpdateDataResponse}})
async def play(
    radio_id: UUID,
    track: UUID = Query(..., description="Track the client believes is current"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Resume the player on the current track."""
    return await _perform(RadioAction.PLAY, radio_id, track, user, db)


@router.get("/{radio_id}/pause", responses={406: {"model": UpdateDataResponse}})
async def pause(
    radio_id: UUID,
    track: UUID = Query(..., description="Track the client believes is current"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Pause the player on the current track."""
    return await _perform(RadioAction.PAUSE, radio_id, track, user, db)


@router.get("/{radio_id}/veto", responses={406: {"model": UpdateDataResponse}})
async def veto(
    radio_id: UUID,
    track: UUID = Query(..., description="Track the client believes is current"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Veto the current track and skip to the next one."""
    return await _perform(RadioAction.VETO, radio_id, track, user, db)


@router.get("/{radio_id}/finish", responses={406: {"model": UpdateDataResponse}})
async def finish(
    radio_id: UUID,
    track: UUID = Query(..., description="Track that finished playing"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Report that the current track played to the end."""
    return await _perform(RadioAction.FINISH, radio_id, track, user, db)
