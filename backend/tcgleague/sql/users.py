from tcgleague.database import database
from tcgleague.models.db.user import UserInsertable, UserPublic, UserToUpdate
from tcgleague.utils.id_types import UserId
from tcgleague.utils.types import assert_some


async def get_user_by_email(email: str) -> UserPublic | None:
    query = """
        SELECT *
        FROM users
        WHERE lower(email) = lower(:email)
        """
    result = await database.fetch_one(query=query, values={"email": email})
    return UserPublic.model_validate(dict(result._mapping)) if result is not None else None


async def get_user_by_id(user_id: UserId) -> UserPublic | None:
    query = """
        SELECT *
        FROM users
        WHERE id = :user_id
        """
    result = await database.fetch_one(query=query, values={"user_id": user_id})
    return UserPublic.model_validate(dict(result._mapping)) if result is not None else None


async def check_whether_email_is_in_use(email: str) -> bool:
    return await get_user_by_email(email) is not None


async def create_user(user: UserInsertable) -> UserPublic:
    query = """
        INSERT INTO users (email, name, created, membership_id, avatar_url, store_name, account_type)
        VALUES (:email, :name, :created, :membership_id, :avatar_url, :store_name, :account_type)
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={
            "email": user.email,
            "name": user.name,
            "created": user.created,
            "membership_id": user.membership_id,
            "avatar_url": user.avatar_url,
            "store_name": user.store_name,
            "account_type": user.account_type.value,
        },
    )
    return UserPublic.model_validate(dict(assert_some(result)._mapping))


async def update_user(user_id: UserId, user: UserToUpdate) -> None:
    query = """
        UPDATE users
        SET name = :name,
            membership_id = :membership_id,
            avatar_url = :avatar_url,
            store_name = :store_name
        WHERE id = :user_id
        """
    await database.execute(
        query=query,
        values={
            "user_id": user_id,
            "name": user.name.strip(),
            "membership_id": user.membership_id,
            "avatar_url": user.avatar_url,
            "store_name": user.store_name,
        },
    )
