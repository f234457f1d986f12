"""User Store — registration, lookup and password checks against a real (SQLite) DB."""

import re

import pytest

from librario.config import get_settings
from librario.core.errors import UsernameTakenError
from librario.services.user_store import UserStore, random_profile_image


@pytest.fixture
def users(db_manager):
    return UserStore(db_manager, get_settings())


async def test_create_user_returns_id_and_profile_image(users):
    user = await users.create_user("ana", "secret1")
    assert isinstance(user.id, int)
    assert user.username == "ana"
    assert re.fullmatch(r"/img/pfp/profile-[1-8]\.png", user.profile_image)


async def test_password_is_stored_hashed(users):
    user = await users.create_user("ana", "secret1")
    stored = await users.find_user("ana")
    assert stored.password_hash != "secret1"
    assert await users.check_password(stored, "secret1")
    assert not await users.check_password(stored, "secret2")
    assert stored.id == user.id


async def test_duplicate_username_raises_username_taken(users):
    await users.create_user("ana", "secret1")
    with pytest.raises(UsernameTakenError) as exc_info:
        await users.create_user("ana", "other")
    assert exc_info.value.http_status == 409


async def test_find_unknown_user_is_none(users):
    assert await users.find_user("nobody") is None


def test_random_profile_image_stays_in_range():
    seen = {random_profile_image(8) for _ in range(200)}
    assert seen <= {f"/img/pfp/profile-{n}.png" for n in range(1, 9)}
