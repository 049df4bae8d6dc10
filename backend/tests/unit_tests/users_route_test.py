import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials
from heliclockter import datetime_utc
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from tcgleague.config import config
from tcgleague.models.db.account import UserAccountType
from tcgleague.models.db.user import UserInsertable, UserPublic, UserToRegister, UserToUpdate
from tcgleague.routes import auth
from tcgleague.routes import users as user_routes
from tcgleague.routes.auth import ALGORITHM, identity_authenticated
from tcgleague.utils.id_types import UserId

JWT_SECRET = "unit-test-secret-with-enough-entropy-0123456789"
OTHER_SECRET = "another-secret-that-is-also-long-enough-987654"


@pytest.fixture(autouse=True)
def _jwt_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "jwt_secret", JWT_SECRET)


def _build_user(user_id: int, account_type: UserAccountType, **kwargs: str) -> UserPublic:
    return UserPublic(
        id=UserId(user_id),
        email=f"user{user_id}@example.com",
        name=f"User {user_id}",
        created=datetime_utc.now(),
        account_type=account_type,
        **kwargs,
    )


def _bearer(claims: dict) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(
        scheme="Bearer", credentials=jwt.encode(claims, JWT_SECRET, algorithm=ALGORITHM)
    )


@pytest.mark.asyncio
async def test_identity_authenticated_reads_email_claim() -> None:
    assert await identity_authenticated(_bearer({"user": "new@example.com"})) == "new@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize("credentials", [None, "not-a-jwt", "wrong-secret", "no-claim"])
async def test_identity_authenticated_rejects_bad_tokens(credentials: str | None) -> None:
    bearer = {
        None: None,
        "not-a-jwt": HTTPAuthorizationCredentials(scheme="Bearer", credentials="abc.def"),
        "wrong-secret": HTTPAuthorizationCredentials(
            scheme="Bearer",
            credentials=jwt.encode({"user": "x@example.com"}, OTHER_SECRET, algorithm=ALGORITHM),
        ),
        "no-claim": _bearer({"sub": "x@example.com"}),
    }[credentials]

    with pytest.raises(HTTPException) as exc_info:
        await identity_authenticated(bearer)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_register_user_creates_store_account(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[UserInsertable] = []

    async def fake_email_in_use(_: str) -> bool:
        return False

    async def fake_create_user(user: UserInsertable) -> UserPublic:
        created.append(user)
        return UserPublic(id=UserId(12), **user.model_dump())

    monkeypatch.setattr(user_routes, "check_whether_email_is_in_use", fake_email_in_use)
    monkeypatch.setattr(user_routes, "create_user", fake_create_user)

    response = await user_routes.register_user(
        UserToRegister(
            name=" Card Kingdom ", account_type=UserAccountType.STORE, store_name="Card Kingdom"
        ),
        "owner@cardkingdom.example",
    )

    assert response.data.id == UserId(12)
    assert response.data.is_store is True
    assert created[0].email == "owner@cardkingdom.example"
    assert created[0].name == "Card Kingdom"
    assert created[0].account_type is UserAccountType.STORE


@pytest.mark.asyncio
async def test_register_user_rejects_existing_email(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_email_in_use(_: str) -> bool:
        return True

    monkeypatch.setattr(user_routes, "check_whether_email_is_in_use", fake_email_in_use)

    with pytest.raises(HTTPException) as exc_info:
        await user_routes.register_user(UserToRegister(name="Luffy"), "luffy@example.com")

    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Boss", "account_type": "ADMIN"},
        {"name": "Shop", "account_type": "STORE"},
        {"name": "Shop", "account_type": "STORE", "store_name": "  "},
        {"name": ""},
    ],
)
def test_register_body_validation(body: dict) -> None:
    with pytest.raises(ValidationError):
        UserToRegister.model_validate(body)


def test_register_body_defaults_to_player() -> None:
    assert UserToRegister(name="Zoro").account_type is UserAccountType.PLAYER


@pytest.mark.asyncio
async def test_update_user_details_of_other_user_is_rejected() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await user_routes.update_user_details(
            UserId(2), UserToUpdate(name="Nami"), _build_user(1, UserAccountType.PLAYER)
        )

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_update_user_details_ignores_store_name_of_players(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    player = _build_user(1, UserAccountType.PLAYER)
    updates: list[UserToUpdate] = []

    async def fake_get_user_by_id(_: UserId) -> UserPublic:
        return player

    async def fake_update_user(_: UserId, user: UserToUpdate) -> None:
        updates.append(user)

    monkeypatch.setattr(user_routes, "get_user_by_id", fake_get_user_by_id)
    monkeypatch.setattr(user_routes, "update_user", fake_update_user)

    await user_routes.update_user_details(
        UserId(1),
        UserToUpdate(name="Nami", membership_id="0001234", store_name="Not A Store"),
        player,
    )

    assert updates[0].store_name is None
    assert updates[0].membership_id == "0001234"


@pytest.mark.asyncio
async def test_admin_can_update_other_users(monkeypatch: pytest.MonkeyPatch) -> None:
    store = _build_user(5, UserAccountType.STORE, store_name="Old Name")
    updates: list[UserToUpdate] = []

    async def fake_get_user_by_id(_: UserId) -> UserPublic:
        return store

    async def fake_update_user(_: UserId, user: UserToUpdate) -> None:
        updates.append(user)

    monkeypatch.setattr(user_routes, "get_user_by_id", fake_get_user_by_id)
    monkeypatch.setattr(user_routes, "update_user", fake_update_user)

    response = await user_routes.update_user_details(
        UserId(5),
        UserToUpdate(name="Store 5", store_name="New Name"),
        _build_user(99, UserAccountType.ADMIN),
    )

    assert response.data.id == UserId(5)
    assert updates[0].store_name == "New Name"


@pytest.mark.asyncio
async def test_admin_authenticated_requires_admin() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await auth.admin_authenticated(_build_user(1, UserAccountType.STORE))

    assert exc_info.value.status_code == 403
