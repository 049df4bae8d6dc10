from pydantic import BaseModel

from tcgleague.models.db.news import NewsArticle
from tcgleague.models.db.player_stats import PlayerStatistics
from tcgleague.models.db.user import UserPublic
from tcgleague.models.deck import DeckView
from tcgleague.models.event import (
    EventDetailView,
    EventStandingsView,
    EventSummaryView,
    PointsSystemRow,
)
from tcgleague.utils.id_types import EventId


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse[DataT](BaseModel):
    data: DataT


class EventCreatedView(BaseModel):
    id: EventId


class EventCreatedResponse(DataResponse[EventCreatedView]):
    pass


class EventResponse(DataResponse[EventDetailView]):
    pass


class EventsResponse(DataResponse[list[EventSummaryView]]):
    pass


class EventStandingsResponse(DataResponse[EventStandingsView]):
    pass


class PointsSystemResponse(DataResponse[list[PointsSystemRow]]):
    pass


class PlayerStatisticsResponse(DataResponse[PlayerStatistics | None]):
    pass


class UserPublicResponse(DataResponse[UserPublic]):
    pass


class DeckResponse(DataResponse[DeckView]):
    pass


class DecksResponse(DataResponse[list[DeckView]]):
    pass


class NewsArticleResponse(DataResponse[NewsArticle]):
    pass


class NewsResponse(DataResponse[list[NewsArticle]]):
    pass
