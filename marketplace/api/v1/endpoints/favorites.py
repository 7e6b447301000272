"""
Favorites endpoints - save, unsave and browse saved listings.
"""

from fastapi import APIRouter, status

from marketplace.core.dependencies import CurrentUserId, ListingFilters, ListingId
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.repositories.user_repository import UserRepository
from marketplace.db.session import DbSession
from marketplace.schemas.listing import ListingResponse
from marketplace.services.favorite_service import FavoriteService

router = APIRouter()


def _get_favorite_service(session: DbSession) -> FavoriteService:
    return FavoriteService(UserRepository(session), ListingRepository(session))


@router.get("", response_model=list[ListingResponse])
async def list_favorites(session: DbSession, filters: ListingFilters, user_id: CurrentUserId):
    return await _get_favorite_service(session).list_for_user(user_id, filters)


@router.post("/{listing_id}", status_code=status.HTTP_201_CREATED)
async def add_favorite(session: DbSession, listing_id: ListingId, user_id: CurrentUserId):
    await _get_favorite_service(session).add(user_id, listing_id)
    return {"message": "Listing added to your favorites."}


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(session: DbSession, listing_id: ListingId, user_id: CurrentUserId):
    await _get_favorite_service(session).remove(user_id, listing_id)
