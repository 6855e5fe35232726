from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.services.ability_feed import AbilityRef
from app.services.catalog_page import CatalogPage, get_page

router = APIRouter(prefix="/abilities", tags=["Abilities"])


class AbilityFeedResponse(BaseModel):
    """Schema for the read-only ability feed snapshot."""
    ability: str
    abilities: list[AbilityRef]
    effects: list[str]


@router.get(
    "/",
    response_model=AbilityFeedResponse,
    summary="Get the ability feed",
    description="Abilities and effect entries fetched from PokeAPI when the page mounted. "
                "Sections whose request failed are empty."
)
async def get_abilities(page: CatalogPage = Depends(get_page)):
    feed = page.feed
    if feed is None:
        return AbilityFeedResponse(ability="", abilities=[], effects=[])
    return AbilityFeedResponse(
        ability=feed.ability_name,
        abilities=feed.abilities,
        effects=feed.effects,
    )
