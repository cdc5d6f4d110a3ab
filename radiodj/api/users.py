"""Listener endpoints."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.db import get_db
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..services.user_service import UserService
from ..services.veto_service import VetoService
from .tracks import VetoResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UserCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)


class UserResponse(BaseModel):
    """Listener response model."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    picture_file_name: Optional[str] = None


@router.get("", response_model=List[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)) -> List[UserResponse]:
    """List listeners by name."""
    users = await UserService(db).by_name()
    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreateRequest, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Register a listener. The returned id is what clients send as their identity."""
    user = await UserService(db).create_user(body.name, body.email)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/vetoes", response_model=List[VetoResponse])
async def user_vetoes(user_id: UUID, db: AsyncSession = Depends(get_db)) -> List[VetoResponse]:
    """List the vetoes a listener has cast."""
    if await UserService(db).get_user_by_id(user_id) is None:
        raise NotFoundError(message=f"User {user_id} not found", details={"user_id": str(user_id)})

    vetoes = await VetoService(db).vetoes_for_user(user_id)
    return [VetoResponse.model_validate(veto) for veto in vetoes]
