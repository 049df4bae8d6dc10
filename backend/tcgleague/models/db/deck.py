import json

from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator

from tcgleague.models.db.shared import BaseModelORM, parse_json_list
from tcgleague.utils.id_types import DeckId, UserId


class DeckCard(BaseModel):
    card_id: str = Field(min_length=1, max_length=32)
    name: str = ""
    quantity: int = Field(default=1, ge=1)


def parse_deck_cards(value: object) -> list[dict]:
    return parse_json_list(value, "deck cards")


def dump_deck_cards(cards: list[DeckCard]) -> str:
    return json.dumps([card.model_dump(mode="json") for card in cards])


class DeckInsertable(BaseModelORM):
    user_id: UserId
    name: str
    format: str = "Standard"
    leader_card_id: str | None = None
    leader_name: str | None = None
    cards: list[DeckCard] = Field(default_factory=list)
    is_public: bool = False
    created: datetime_utc
    updated: datetime_utc

    @field_validator("cards", mode="before")
    @classmethod
    def parse_json_cards(cls, value: object) -> list[dict]:
        return parse_deck_cards(value)

    @property
    def total_cards(self) -> int:
        return sum(card.quantity for card in self.cards)


class Deck(DeckInsertable):
    id: DeckId
