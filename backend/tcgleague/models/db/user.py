from heliclockter import datetime_utc
from pydantic import BaseModel, Field, model_validator

from tcgleague.models.db.account import UserAccountType
from tcgleague.models.db.shared import BaseModelORM
from tcgleague.utils.id_types import UserId


class UserBase(BaseModelORM):
    email: str
    name: str
    created: datetime_utc
    membership_id: str | None = None
    avatar_url: str | None = None
    store_name: str | None = None
    account_type: UserAccountType

    @property
    def is_store(self) -> bool:
        return self.account_type in (UserAccountType.STORE, UserAccountType.ADMIN)

    @property
    def display_store_name(self) -> str:
        return self.store_name or self.name


class UserInsertable(UserBase):
    pass


class UserPublic(UserBase):
    id: UserId


class UserProfileBody(BaseModel):
    name: str = Field(min_length=1, max_length=80)
    membership_id: str | None = Field(default=None, max_length=64)
    store_name: str | None = Field(default=None, max_length=120)


class UserToRegister(UserProfileBody):
    """
    Profile for an identity that has signed in with the identity provider but has no account
    yet. Admin accounts cannot be self-registered.
    """

    account_type: UserAccountType = UserAccountType.PLAYER

    @model_validator(mode="after")
    def check_account_type(self) -> "UserToRegister":
        if self.account_type is UserAccountType.ADMIN:
            raise ValueError("Admin accounts cannot be registered")
        if self.account_type is UserAccountType.STORE and not (self.store_name or "").strip():
            raise ValueError("Stores need a store name")
        return self


class UserToUpdate(UserProfileBody):
    avatar_url: str | None = Field(default=None, max_length=500)
