from collections import Counter

from pydantic import BaseModel, Field, field_validator, model_validator

from tcgleague.models.db.deck import DeckCard
from tcgleague.utils.id_types import DeckId, UserId

MAX_MAIN_DECK_CARDS = 50


class DeckBody(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    format: str = Field(default="Standard", max_length=40)
    leader_card_id: str | None = Field(default=None, max_length=32)
    leader_name: str | None = Field(default=None, max_length=120)
    cards: list[DeckCard] = Field(default_factory=list)
    is_public: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if stripped == "":
            raise ValueError("Deck name cannot be empty")
        return stripped

    @model_validator(mode="after")
    def check_cards(self) -> "DeckBody":
        duplicates = sorted(
            card_id for card_id, count in Counter(card.card_id for card in self.cards).items() if count > 1
        )
        if duplicates:
            raise ValueError(f"Card listed more than once: {', '.join(duplicates)}")

        total = sum(card.quantity for card in self.cards)
        if total > MAX_MAIN_DECK_CARDS:
            raise ValueError(f"Deck has {total} cards, the limit is {MAX_MAIN_DECK_CARDS}")
        return self


class DeckView(BaseModel):
    id: DeckId
    user_id: UserId
    name: str
    format: str
    leader_card_id: str | None = None
    leader_name: str | None = None
    cards: list[DeckCard] = Field(default_factory=list)
    total_cards: int = 0
    is_public: bool = False
