"""Request dependencies shared by the API routers."""
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import app_settings
from ..core.db import get_db
from ..core.exceptions import AuthenticationError
from ..models import User
from ..services.user_service import UserService


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    """Resolve the signed-in listener from the identity header.

    Raises AuthenticationError (401) when the header is missing, malformed or
    names no known user.
    """
    raw_user_id = request.headers.get(app_settings.auth_header)
    if not raw_user_id:
        raise AuthenticationError(details={"reason": "missing_identity"})

    try:
        user_id = UUID(raw_user_id)
    except ValueError:
        raise AuthenticationError(details={"reason": "malformed_identity"})

    user = await UserService(db).get_user_by_id(user_id)
    if user is None:
        raise AuthenticationError(details={"reason": "unknown_user", "user_id": raw_user_id})
    return user
