"""
Category browsing - one page per category, `all` for every published listing.
"""

from fastapi import APIRouter

from marketplace.core.dependencies import ListingFilters
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.session import DbSession
from marketplace.schemas.listing import CategoryPage
from marketplace.services.listing_service import ListingService

router = APIRouter()


@router.get("/{category}", response_model=CategoryPage)
async def category_page(session: DbSession, category: str, filters: ListingFilters):
    return await ListingService(ListingRepository(session)).category_page(category, filters)
