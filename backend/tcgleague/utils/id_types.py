from typing import NewType

EventId = NewType("EventId", int)
StageId = NewType("StageId", int)
ParticipantId = NewType("ParticipantId", int)
UserId = NewType("UserId", int)
PlayerId = NewType("PlayerId", int)
DeckId = NewType("DeckId", int)
NewsArticleId = NewType("NewsArticleId", int)
