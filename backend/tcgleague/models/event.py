from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator, model_validator

from tcgleague.models.db.event import (
    EventFormat,
    EventLocation,
    EventStatus,
    Participant,
    Stage,
    Standing,
)
from tcgleague.utils.id_types import EventId, PlayerId, UserId


class Placement(BaseModel):
    player_id: PlayerId
    player_name: str = ""
    final_rank: int
    wins: int = 0
    losses: int = 0


class PlacementBody(BaseModel):
    player_id: PlayerId
    final_rank: int = Field(ge=1)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)


class StageResultsBody(BaseModel):
    placements: list[PlacementBody] = Field(default_factory=list)


class StagePlanEntry(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    date: datetime_utc | None = None


class EventCreateBody(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    format: EventFormat = EventFormat.CONSTRUCTED
    start_time: datetime_utc
    end_time: datetime_utc | None = None
    max_participants: int | None = Field(default=None, ge=1)
    entry_fee: float | None = Field(default=None, ge=0)
    prize_pool: str = ""
    location: EventLocation = Field(default_factory=EventLocation)
    stage_count: int = Field(default=1, ge=1, le=64)
    stages: list[StagePlanEntry] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if stripped == "":
            raise ValueError("Event name cannot be empty")
        return stripped

    @model_validator(mode="after")
    def check_stage_plan(self) -> "EventCreateBody":
        if len(self.stages) > self.stage_count:
            raise ValueError("More stage entries than stage_count")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("Event cannot end before it starts")
        return self


class EventChangeStatusBody(BaseModel):
    status: EventStatus


class ParticipantRegisterBody(BaseModel):
    deck_name: str | None = Field(default=None, max_length=120)
    membership_id: str | None = Field(default=None, max_length=64)


class EventSummaryView(BaseModel):
    id: EventId
    store_id: UserId
    store_name: str
    name: str
    format: EventFormat
    status: EventStatus
    start_time: datetime_utc
    end_time: datetime_utc
    location: EventLocation
    participant_count: int = 0
    max_participants: int | None = None
    stage_count: int = 0
    current_stage: int = 0


class EventDetailView(EventSummaryView):
    description: str = ""
    entry_fee: float | None = None
    prize_pool: str = ""
    participants: list[Participant] = Field(default_factory=list)
    stages: list[Stage] = Field(default_factory=list)
    standings: list[Standing] = Field(default_factory=list)


class StageStandingsView(BaseModel):
    stage_number: int
    name: str
    is_completed: bool
    standings: list[Standing] = Field(default_factory=list)


class EventStandingsView(BaseModel):
    event_id: EventId
    status: EventStatus
    current_stage: int
    cumulative: list[Standing] = Field(default_factory=list)
    stages: list[StageStandingsView] = Field(default_factory=list)


class PointsSystemRow(BaseModel):
    rank: int
    points: int
