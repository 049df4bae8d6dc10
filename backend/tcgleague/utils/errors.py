from collections.abc import Iterator
from contextlib import contextmanager
from enum import auto

from asyncpg.exceptions import ForeignKeyViolationError, UniqueViolationError
from fastapi import HTTPException
from starlette import status

from tcgleague.utils.types import EnumAutoStr


class UniqueIndex(EnumAutoStr):
    uq_event_participants_event_id_player_id = auto()
    ix_users_email = auto()


class ForeignKey(EnumAutoStr):
    event_participants_event_id_fkey = auto()
    event_participants_player_id_fkey = auto()
    events_store_id_fkey = auto()
    decks_user_id_fkey = auto()


unique_index_violation_error_lookup = {
    UniqueIndex.uq_event_participants_event_id_player_id: "Player is already registered for this event",
    UniqueIndex.ix_users_email: "Email address already in use",
}


foreign_key_violation_error_lookup = {
    ForeignKey.event_participants_event_id_fkey: "Event does not exist",
    ForeignKey.event_participants_player_id_fkey: "Player does not exist",
    ForeignKey.events_store_id_fkey: "Store does not exist",
    ForeignKey.decks_user_id_fkey: "User does not exist",
}


@contextmanager
def check_unique_violation(indices_to_check: set[UniqueIndex]) -> Iterator[None]:
    try:
        yield
    except UniqueViolationError as exc:
        for unique_index in indices_to_check:
            if unique_index.value in str(exc):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=unique_index_violation_error_lookup[unique_index],
                ) from exc

        raise


@contextmanager
def check_foreign_key_violation(foreign_keys_to_check: set[ForeignKey]) -> Iterator[None]:
    try:
        yield
    except ForeignKeyViolationError as exc:
        constraint_name = getattr(exc, "constraint_name", "") or ""
        for foreign_key in foreign_keys_to_check:
            if foreign_key.value == constraint_name or foreign_key.value in str(exc):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=foreign_key_violation_error_lookup[foreign_key],
                ) from exc

        raise
