"""
FastAPI dependencies - authenticated user resolution and shared query parsing.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.config import get_settings
from marketplace.db.session import DbSession
from marketplace.db.repositories.listing_repository import ListingFilter
from marketplace.db.repositories.user_repository import UserRepository
from marketplace.core.security import decode_access_token
from marketplace.schemas.fields import MAX_DB_INT

settings = get_settings()
security = HTTPBearer(auto_error=False)


def _subject(credentials: HTTPAuthorizationCredentials | None) -> int | None:
    if not credentials:
        return None
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        return None
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None


async def get_current_user_id(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Resolve JWT to user id. Raises 401 if missing or invalid."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = _subject(credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    repo = UserRepository(session)
    user = await repo.get_by_id(user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user.id


# Optional auth: drafts are visible to their owner only
async def get_optional_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int | None:
    """Return user id if valid token present, else None."""
    return _subject(credentials)


ListingId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]

CurrentUserId = Annotated[int, Depends(get_current_user_id)]
OptionalUserId = Annotated[int | None, Depends(get_optional_user_id)]


def get_listing_filter(
    search: str | None = Query(None, max_length=100),
    categories: list[str] = Query([]),
    colors: list[str] = Query([]),
    price: str | None = Query(None, pattern=r"^(under25|25-50|50-75|100\+|all)$"),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    sort: str | None = Query(None, pattern=r"^(price-asc|price-desc|date-newest|date-oldest)$"),
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> ListingFilter:
    """Browse filters from the query string (?categories=a&categories=b repeats)."""
    return ListingFilter(
        search=(search or "").strip() or None,
        categories=categories,
        colors=colors,
        price=price,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        skip=skip,
        limit=limit,
    )


ListingFilters = Annotated[ListingFilter, Depends(get_listing_filter)]
