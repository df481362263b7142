"""Tests for the user service and query classification."""

import pytest

from user_admin_api.app.schemas.user import QueryField
from user_admin_api.app.services.user_service import (
    FIND_USER,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserService,
    based_on_query,
)


class TestBasedOnQuery:
    def test_uid(self):
        descriptor = based_on_query({"uid": "abc-123"})

        assert descriptor.by == QueryField.UID
        assert descriptor.param == "abc-123"

    def test_uid_takes_precedence_over_email(self):
        descriptor = based_on_query({"uid": "abc-123", "email": "user@example.com"})

        assert descriptor.by == QueryField.UID

    def test_email(self):
        descriptor = based_on_query({"email": "user@example.com"})

        assert descriptor.by == QueryField.EMAIL
        assert descriptor.param == "user@example.com"

    @pytest.mark.parametrize("query", [{}, {"uid": ""}, {"page": "2"}])
    def test_falls_back_to_all(self, query):
        descriptor = based_on_query(query)

        assert descriptor.by == QueryField.ALL
        assert descriptor.param is None


def test_every_query_field_has_a_finder():
    assert set(FIND_USER) == set(QueryField)


class TestUserService:
    async def test_create_and_find(self, database):
        created = await UserService.create_user({"uid": "abc-123", "email": "a@example.com", "name": "Maria"})

        assert created == {"uid": "abc-123", "email": "a@example.com", "name": "Maria"}
        assert await UserService.find_by_uid("abc-123") == [created]
        assert await UserService.find_by_email("a@example.com") == [created]

    async def test_create_generates_uid(self, database):
        created = await UserService.create_user({"name": "Maria"})

        assert created["uid"]
        assert created["name"] == "Maria"

    async def test_create_duplicate_uid(self, database):
        await UserService.create_user({"uid": "abc-123"})

        with pytest.raises(UserAlreadyExistsError, match="abc-123"):
            await UserService.create_user({"uid": "abc-123"})

    async def test_find_missing_returns_empty_list(self, database):
        assert await UserService.find_by_uid("nobody") == []

    async def test_find_all_in_creation_order(self, database):
        await UserService.create_user({"uid": "first"})
        await UserService.create_user({"uid": "second"})

        users = await UserService.find_all()

        assert [user["uid"] for user in users] == ["first", "second"]

    async def test_update_merges_fields(self, database):
        await UserService.create_user({"uid": "abc-123", "email": "a@example.com", "name": "Maria", "age": 30})

        updated = await UserService.update_user_by_uid({"uid": "abc-123", "name": "Ana"})

        assert updated == {"uid": "abc-123", "email": "a@example.com", "name": "Ana", "age": 30}
        assert await UserService.find_by_uid("abc-123") == [updated]

    async def test_update_missing_user(self, database):
        with pytest.raises(UserNotFoundError, match="User nobody not found"):
            await UserService.update_user_by_uid({"uid": "nobody"})

    async def test_update_requires_uid(self, database):
        with pytest.raises(ValueError, match="uid is required"):
            await UserService.update_user_by_uid({"name": "Ana"})

    async def test_remove_returns_removed_user(self, database):
        created = await UserService.create_user({"uid": "abc-123", "name": "Maria"})

        removed = await UserService.remove_user("abc-123")

        assert removed == created
        assert await UserService.find_by_uid("abc-123") == []

    async def test_remove_missing_user(self, database):
        with pytest.raises(UserNotFoundError):
            await UserService.remove_user("nobody")
