"""Request Dependencies — caller identity, feed service and upload storage.

Invariants:
    - get_caller raises AuthenticationError (401) when no valid bearer token is sent
    - One PostFeedService per request, bound to that request's DB session
    - Settings always come from get_settings (tests override it via dependency_overrides)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from postfeed.config import Settings, get_settings
from postfeed.core.domain_types import UserId
from postfeed.core.errors import AuthenticationError
from postfeed.infrastructure.database import get_db
from postfeed.infrastructure.image_storage import LocalImageStorage
from postfeed.infrastructure.post_repository import SqlPostRepository
from postfeed.infrastructure.security import resolve_identity
from postfeed.infrastructure.user_repository import SqlUserRepository
from postfeed.services.post_feed import PostFeedService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> UserId:
    """Resolve the bearer token into the caller's user id."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return resolve_identity(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm,
    )


async def get_post_feed(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PostFeedService:
    return PostFeedService(
        SqlPostRepository(db),
        SqlUserRepository(db),
        trending_limit=settings.trending_limit,
    )


def get_image_storage(
    settings: Settings = Depends(get_settings),
) -> LocalImageStorage:
    return LocalImageStorage(settings.upload_dir, settings.upload_max_bytes)
