from fastapi import APIRouter, Depends, HTTPException
from heliclockter import datetime_utc
from starlette import status

from tcgleague.config import config
from tcgleague.models.db.user import UserInsertable, UserPublic, UserToRegister, UserToUpdate
from tcgleague.routes.auth import identity_authenticated, is_admin_user, user_authenticated
from tcgleague.routes.models import UserPublicResponse
from tcgleague.sql.users import (
    check_whether_email_is_in_use,
    create_user,
    get_user_by_id,
    update_user,
)
from tcgleague.utils.errors import UniqueIndex, check_unique_violation
from tcgleague.utils.id_types import UserId
from tcgleague.utils.logging import logger
from tcgleague.utils.types import assert_some

router = APIRouter(prefix=config.api_prefix)


@router.get("/users/me", response_model=UserPublicResponse)
async def get_me(user_public: UserPublic = Depends(user_authenticated)) -> UserPublicResponse:
    return UserPublicResponse(data=user_public)


@router.post("/users/register", response_model=UserPublicResponse)
async def register_user(
    user_to_register: UserToRegister,
    email: str = Depends(identity_authenticated),
) -> UserPublicResponse:
    if await check_whether_email_is_in_use(email):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Email address already in use")

    user = UserInsertable(
        email=email,
        name=user_to_register.name.strip(),
        created=datetime_utc.now(),
        membership_id=user_to_register.membership_id,
        store_name=user_to_register.store_name,
        account_type=user_to_register.account_type,
    )
    with check_unique_violation({UniqueIndex.ix_users_email}):
        user_created = await create_user(user)

    logger.info(f"Registered {user_created.account_type.value.lower()} account {user_created.id}")
    return UserPublicResponse(data=user_created)


@router.get("/users/{user_id}", response_model=UserPublicResponse)
async def get_user(
    user_id: UserId, user_public: UserPublic = Depends(user_authenticated)
) -> UserPublicResponse:
    if user_public.id != user_id and not is_admin_user(user_public):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't view details of this user")

    user = await get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")
    return UserPublicResponse(data=user)


@router.put("/users/{user_id}", response_model=UserPublicResponse)
async def update_user_details(
    user_id: UserId,
    user_to_update: UserToUpdate,
    user_public: UserPublic = Depends(user_authenticated),
) -> UserPublicResponse:
    if user_public.id != user_id and not is_admin_user(user_public):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't change details of this user")

    user = await get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    # Only store accounts carry a store name.
    if not user.is_store:
        user_to_update = user_to_update.model_copy(update={"store_name": None})

    await update_user(user_id, user_to_update)
    user_updated = await get_user_by_id(user_id)
    return UserPublicResponse(data=assert_some(user_updated))
