import logging
from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    api_token: Optional[str] = Query(None, description="Per-user API token"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the calling user from ``?api_token=`` or an ``Authorization: Bearer`` header."""
    token = api_token or (credentials.credentials if credentials else None)

    user = None
    if token:
        result = await db.execute(select(User).where(User.api_token == token))
        user = result.scalar_one_or_none()

    if user is None:
        logger.warning("Rejected request with %s API token", "an unknown" if token else "no")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
