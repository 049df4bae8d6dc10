from heliclockter import datetime_utc

from tcgleague.database import database
from tcgleague.models.db.deck import Deck, dump_deck_cards
from tcgleague.models.deck import DeckBody
from tcgleague.utils.id_types import DeckId, UserId
from tcgleague.utils.types import assert_some


async def get_decks_for_user(
    user_id: UserId, *, include_private: bool, search: str | None = None
) -> list[Deck]:
    query = """
        SELECT *
        FROM decks
        WHERE user_id = :user_id
        AND (:include_private OR is_public)
        AND (CAST(:search AS text) IS NULL OR name ILIKE '%' || CAST(:search AS text) || '%')
        ORDER BY updated DESC, id DESC
        """
    result = await database.fetch_all(
        query=query,
        values={
            "user_id": user_id,
            "include_private": include_private,
            "search": search.strip() if search is not None and search.strip() else None,
        },
    )
    return [Deck.model_validate(dict(row._mapping)) for row in result]


async def sql_create_deck(user_id: UserId, body: DeckBody) -> Deck:
    query = """
        INSERT INTO decks (
            user_id, name, format, leader_card_id, leader_name, cards, is_public, created, updated
        )
        VALUES (
            :user_id,
            :name,
            :format,
            :leader_card_id,
            :leader_name,
            CAST(:cards AS json),
            :is_public,
            :now,
            :now
        )
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={
            "user_id": user_id,
            "name": body.name,
            "format": body.format,
            "leader_card_id": body.leader_card_id,
            "leader_name": body.leader_name,
            "cards": dump_deck_cards(body.cards),
            "is_public": body.is_public,
            "now": datetime_utc.now(),
        },
    )
    return Deck.model_validate(dict(assert_some(result)._mapping))


async def sql_update_deck(user_id: UserId, deck_id: DeckId, body: DeckBody) -> Deck | None:
    query = """
        UPDATE decks
        SET name = :name,
            format = :format,
            leader_card_id = :leader_card_id,
            leader_name = :leader_name,
            cards = CAST(:cards AS json),
            is_public = :is_public,
            updated = :now
        WHERE id = :deck_id
        AND user_id = :user_id
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={
            "deck_id": deck_id,
            "user_id": user_id,
            "name": body.name,
            "format": body.format,
            "leader_card_id": body.leader_card_id,
            "leader_name": body.leader_name,
            "cards": dump_deck_cards(body.cards),
            "is_public": body.is_public,
            "now": datetime_utc.now(),
        },
    )
    return Deck.model_validate(dict(result._mapping)) if result is not None else None


async def sql_delete_deck(user_id: UserId, deck_id: DeckId) -> bool:
    query = """
        DELETE FROM decks
        WHERE id = :deck_id
        AND user_id = :user_id
        RETURNING id
        """
    result = await database.fetch_val(query=query, values={"deck_id": deck_id, "user_id": user_id})
    return result is not None
