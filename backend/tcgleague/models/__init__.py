"""Model registration module used by alembic autogeneration."""

from tcgleague.models.db.deck import Deck  # noqa: F401
from tcgleague.models.db.event import Event, Participant, Stage  # noqa: F401
from tcgleague.models.db.news import NewsArticle  # noqa: F401
from tcgleague.models.db.player_stats import PlayerStatistics  # noqa: F401
from tcgleague.models.db.user import UserPublic  # noqa: F401
