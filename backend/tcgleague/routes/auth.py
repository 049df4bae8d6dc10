import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette import status

from tcgleague.config import config
from tcgleague.models.db.account import UserAccountType
from tcgleague.models.db.event import EventRecord
from tcgleague.models.db.user import UserPublic
from tcgleague.sql.events import sql_get_event_record
from tcgleague.sql.users import get_user_by_email
from tcgleague.utils.id_types import EventId

ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


def credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def email_from_token(token: str) -> str | None:
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None

    email = payload.get("user")
    if not isinstance(email, str) or email.strip() == "":
        return None

    return email.strip()


async def check_jwt_and_get_user(token: str) -> UserPublic | None:
    email = email_from_token(token)
    return await get_user_by_email(email) if email is not None else None


async def identity_authenticated(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Email of a signed-in identity, which may not have an account yet."""
    email = email_from_token(credentials.credentials) if credentials is not None else None
    if email is None:
        raise credentials_exception()
    return email


async def user_authenticated(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserPublic:
    if credentials is None:
        raise credentials_exception()

    user = await check_jwt_and_get_user(credentials.credentials)
    if user is None:
        raise credentials_exception()

    return user


async def store_authenticated(user: UserPublic = Depends(user_authenticated)) -> UserPublic:
    if not user.is_store:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only stores can manage events",
        )
    return user


async def player_authenticated(user: UserPublic = Depends(user_authenticated)) -> UserPublic:
    if user.account_type is not UserAccountType.PLAYER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only players can register for events",
        )
    return user


def is_admin_user(user: UserPublic) -> bool:
    return user.account_type is UserAccountType.ADMIN


async def admin_authenticated(user: UserPublic = Depends(user_authenticated)) -> UserPublic:
    if not is_admin_user(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def user_can_manage_event(user: UserPublic, event: EventRecord) -> bool:
    return is_admin_user(user) or event.store_id == user.id


async def user_authenticated_for_event(
    event_id: EventId, user: UserPublic = Depends(store_authenticated)
) -> UserPublic:
    event = await sql_get_event_record(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

    if not user_can_manage_event(user, event):
        raise credentials_exception()

    return user
