import json
from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator

from tcgleague.models.db.shared import BaseModelORM, parse_json_list
from tcgleague.utils.id_types import EventId, ParticipantId, PlayerId, StageId, UserId
from tcgleague.utils.types import EnumAutoStr


class EventStatus(EnumAutoStr):
    UPCOMING = auto()
    ONGOING = auto()
    COMPLETED = auto()
    CANCELLED = auto()


class EventFormat(EnumAutoStr):
    CONSTRUCTED = auto()
    LIMITED = auto()
    CHAMPIONSHIP = auto()
    CASUAL = auto()
    STANDARD = auto()


class Standing(BaseModel):
    player_id: PlayerId
    player_name: str
    points: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    matches_played: int = 0
    opponent_win_percentage: float = 0
    game_win_percentage: float = 0
    rank: int


def parse_standings(value: object) -> list[dict]:
    return parse_json_list(value, "standings")


def dump_standings(standings: list[Standing]) -> str:
    return json.dumps([standing.model_dump(mode="json") for standing in standings])


class ParticipantInsertable(BaseModelORM):
    event_id: EventId
    player_id: PlayerId
    player_name: str
    membership_id: str | None = None
    deck_name: str | None = None
    registered_at: datetime_utc
    dropped: bool = False


class Participant(ParticipantInsertable):
    id: ParticipantId


class StageInsertable(BaseModelORM):
    event_id: EventId
    stage_number: int
    name: str
    date: datetime_utc
    is_completed: bool = False
    standings: list[Standing] = Field(default_factory=list)

    @field_validator("standings", mode="before")
    @classmethod
    def parse_json_standings(cls, value: object) -> list[dict]:
        return parse_standings(value)


class Stage(StageInsertable):
    id: StageId


class EventLocation(BaseModel):
    address: str = ""
    city: str = ""
    state: str = ""
    latitude: float | None = None
    longitude: float | None = None


class EventInsertable(BaseModelORM):
    store_id: UserId
    store_name: str
    name: str
    description: str = ""
    format: EventFormat = EventFormat.CONSTRUCTED
    start_time: datetime_utc
    end_time: datetime_utc
    max_participants: int | None = None
    entry_fee: float | None = None
    prize_pool: str = ""
    location_address: str = ""
    location_city: str = ""
    location_state: str = ""
    latitude: float | None = None
    longitude: float | None = None
    status: EventStatus = EventStatus.UPCOMING
    current_stage: int = 0
    created: datetime_utc
    updated: datetime_utc


class EventRecord(EventInsertable):
    id: EventId
    standings: list[Standing] = Field(default_factory=list)

    @field_validator("standings", mode="before")
    @classmethod
    def parse_json_standings(cls, value: object) -> list[dict]:
        return parse_standings(value)

    @property
    def location(self) -> EventLocation:
        return EventLocation(
            address=self.location_address,
            city=self.location_city,
            state=self.location_state,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class EventWithCounts(EventRecord):
    participant_count: int = 0
    stage_count: int = 0


class Event(EventRecord):
    participants: list[Participant] = Field(default_factory=list)
    stages: list[Stage] = Field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return self.status in (EventStatus.COMPLETED, EventStatus.CANCELLED)

    @property
    def is_full(self) -> bool:
        return (
            self.max_participants is not None
            and len(self.participants) >= self.max_participants
        )

    def get_participant(self, player_id: PlayerId) -> Participant | None:
        return next(
            (participant for participant in self.participants if participant.player_id == player_id),
            None,
        )
