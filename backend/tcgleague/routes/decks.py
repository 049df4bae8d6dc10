from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from tcgleague.config import config
from tcgleague.models.db.user import UserPublic
from tcgleague.models.deck import DeckBody
from tcgleague.routes.auth import is_admin_user, user_authenticated
from tcgleague.routes.models import DeckResponse, DecksResponse, SuccessResponse
from tcgleague.routes.util import to_deck_view
from tcgleague.sql.decks import get_decks_for_user, sql_create_deck, sql_delete_deck, sql_update_deck
from tcgleague.utils.errors import ForeignKey, check_foreign_key_violation
from tcgleague.utils.id_types import DeckId, UserId

router = APIRouter(prefix=config.api_prefix)


@router.get("/users/me/decks", response_model=DecksResponse)
async def get_my_decks(
    search: str | None = Query(default=None, description="Search in deck name."),
    user_public: UserPublic = Depends(user_authenticated),
) -> DecksResponse:
    decks = await get_decks_for_user(user_public.id, include_private=True, search=search)
    return DecksResponse(data=[to_deck_view(deck) for deck in decks])


@router.get("/users/{user_id}/decks", response_model=DecksResponse)
async def get_decks_of_user(
    user_id: UserId,
    search: str | None = Query(default=None, description="Search in deck name."),
    user_public: UserPublic = Depends(user_authenticated),
) -> DecksResponse:
    include_private = user_public.id == user_id or is_admin_user(user_public)
    decks = await get_decks_for_user(user_id, include_private=include_private, search=search)
    return DecksResponse(data=[to_deck_view(deck) for deck in decks])


@router.post("/users/me/decks", response_model=DeckResponse)
async def create_deck(
    body: DeckBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> DeckResponse:
    with check_foreign_key_violation({ForeignKey.decks_user_id_fkey}):
        deck = await sql_create_deck(user_public.id, body)
    return DeckResponse(data=to_deck_view(deck))


@router.put("/users/me/decks/{deck_id}", response_model=DeckResponse)
async def update_deck(
    deck_id: DeckId,
    body: DeckBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> DeckResponse:
    deck = await sql_update_deck(user_public.id, deck_id, body)
    if deck is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Deck not found")
    return DeckResponse(data=to_deck_view(deck))


@router.delete("/users/me/decks/{deck_id}", response_model=SuccessResponse)
async def delete_deck(
    deck_id: DeckId,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    if not await sql_delete_deck(user_public.id, deck_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Deck not found")
    return SuccessResponse()
