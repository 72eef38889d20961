"""User Store — CRUD semantics and the email-uniqueness invariant.

Invariants:
    - create then get returns the same user
    - duplicate email on create -> EmailConflictError, store unchanged
    - update preserves id; email collision on update leaves both rows unchanged
    - delete then get -> ResourceNotFoundError; delete_all empties the table
"""

import pytest
from sqlalchemy import func, select

from dogproxy.core.domain_types import UserId
from dogproxy.core.errors import EmailConflictError, ResourceNotFoundError
from dogproxy.models.user import User
from dogproxy.services.user_store import UserStore


@pytest.fixture
def store(test_db):
    return UserStore(test_db)


async def _row(session_factory, user_id: int) -> User | None:
    async with session_factory() as fresh:
        return await fresh.get(User, user_id)


async def _count(session_factory) -> int:
    async with session_factory() as fresh:
        return (await fresh.execute(select(func.count(User.id)))).scalar_one()


async def test_create_then_get_returns_same_user(store):
    created = await store.create("Grace Hopper", "grace@example.com", "Arlington")

    fetched = await store.get(UserId(created.id))

    assert fetched.id == created.id
    assert fetched.name == "Grace Hopper"
    assert fetched.email == "grace@example.com"
    assert fetched.address == "Arlington"


async def test_create_assigns_distinct_ids(store):
    a = await store.create("A", "a@example.com", "x")
    b = await store.create("B", "b@example.com", "y")
    assert a.id != b.id


async def test_create_duplicate_email_conflicts_without_mutation(
    store, seed_users, test_session_factory,
):
    before = await _count(test_session_factory)

    with pytest.raises(EmailConflictError):
        await store.create("Impostor", "ada@example.com", "Nowhere")

    assert await _count(test_session_factory) == before


async def test_store_usable_after_conflict(store, seed_users):
    with pytest.raises(EmailConflictError):
        await store.create("Impostor", "ada@example.com", "Nowhere")

    user = await store.create("Real", "real@example.com", "Somewhere")
    assert user.id is not None


async def test_get_missing_user_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await store.get(UserId(9999))
    assert exc_info.value.http_status == 404


async def test_list_all_ordered_by_id(store, seed_users):
    users = await store.list_all()
    assert [u.id for u in users] == sorted(u.id for u in seed_users)


async def test_list_all_empty(store):
    assert await store.list_all() == []


async def test_update_address_only_preserves_id_and_email(
    store, seed_users, test_session_factory,
):
    ada = seed_users[0]

    updated = await store.update(
        UserId(ada.id), ada.name, ada.email, "Marylebone",
    )

    assert updated.id == ada.id
    row = await _row(test_session_factory, ada.id)
    assert row.email == "ada@example.com"
    assert row.address == "Marylebone"


async def test_update_to_taken_email_conflicts_and_leaves_rows(
    store, seed_users, test_session_factory,
):
    ada, alan = seed_users
    # the failed commit rolls back the shared session and expires both instances
    ada_id, alan_id = ada.id, alan.id

    with pytest.raises(EmailConflictError):
        await store.update(UserId(ada_id), "Ada", "alan@example.com", "Elsewhere")

    ada_row = await _row(test_session_factory, ada_id)
    alan_row = await _row(test_session_factory, alan_id)
    assert ada_row.email == "ada@example.com"
    assert ada_row.address == "12 St James's Sq"
    assert alan_row.email == "alan@example.com"


async def test_update_missing_user_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await store.update(UserId(404), "x", "x@example.com", "y")


async def test_delete_then_get_raises_not_found(store, seed_users):
    ada = seed_users[0]

    await store.delete(UserId(ada.id))

    with pytest.raises(ResourceNotFoundError):
        await store.get(UserId(ada.id))


async def test_delete_missing_user_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await store.delete(UserId(12345))


async def test_delete_all_then_list_is_empty(store, seed_users):
    deleted = await store.delete_all()

    assert deleted == 2
    assert await store.list_all() == []


async def test_find_by_email_is_case_insensitive(store, seed_users):
    user = await store.find_by_email("  ADA@Example.com ")
    assert user.id == seed_users[0].id


async def test_find_by_email_missing_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await store.find_by_email("nobody@example.com")
