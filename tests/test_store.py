"""Tests for the store gateway and repository machinery."""

import pytest
from sqlalchemy import text

from bugtracker.core.exceptions import StoreError, ValidationError
from bugtracker.models.comment import Comment
from bugtracker.repositories import CommentRepository, UpdateBuilder, UserRepository
from bugtracker.schemas.bug import BugResponse
from bugtracker.schemas.user import UserInDB
from bugtracker.store import StoreGateway


class TestUpdateBuilder:
    """Tests for partial update statements."""

    def test_empty_builder_is_rejected(self):
        builder = UpdateBuilder(Comment.__table__)

        with pytest.raises(ValidationError) as exc_info:
            builder.build(Comment.__table__.c.comment_id, 1)

        assert exc_info.value.code == "NO_FIELDS_TO_UPDATE"

    def test_unknown_column_is_rejected(self):
        with pytest.raises(KeyError):
            UpdateBuilder(Comment.__table__).set("DROP TABLE comments", "x")

    def test_values_are_bound(self):
        statement = (
            UpdateBuilder(Comment.__table__)
            .set("comment_text", "'; DROP TABLE comments; --")
            .build(Comment.__table__.c.comment_id, 1)
        )
        compiled = statement.compile()

        assert "DROP TABLE" not in str(compiled)
        assert "'; DROP TABLE comments; --" in compiled.params.values()

    def test_set_present_only_takes_listed_columns(self):
        builder = UpdateBuilder(Comment.__table__).set_present(
            {"comment_text": "x", "bug_id": 5}, ("comment_text",)
        )
        statement = builder.build(Comment.__table__.c.comment_id, 1)

        assert "bug_id" not in str(statement.compile()).split("WHERE")[0]


class TestStoreGateway:
    """Tests for statement execution and transactions."""

    @pytest.mark.asyncio
    async def test_execute_returns_rows(self, gateway: StoreGateway):
        result = await gateway.execute(text("SELECT :value AS value"), {"value": 7})

        assert result.rows == [{"value": 7}]
        assert result.first() == {"value": 7}

    @pytest.mark.asyncio
    async def test_failed_statement_raises_store_error(self, gateway: StoreGateway):
        with pytest.raises(StoreError) as exc_info:
            await gateway.execute(text("SELECT * FROM no_such_table"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "STORE_ERROR"

    @pytest.mark.asyncio
    async def test_delete_reports_affected_count(
        self, gateway: StoreGateway, test_bug: BugResponse, test_user: UserInDB
    ):
        comments = CommentRepository(gateway)
        await comments.create(
            {"bug_id": test_bug.bug_id, "user_id": test_user.user_id, "comment_text": "x"}
        )

        assert await comments.delete_by_bug(test_bug.bug_id) == 1

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self, gateway: StoreGateway, test_user: UserInDB):
        with pytest.raises(RuntimeError):
            async with gateway.transaction() as tx:
                await UserRepository(tx).update(test_user.user_id, {"username": "renamed"})
                raise RuntimeError("abort")

        user = await UserRepository(gateway).get_by_id(test_user.user_id)
        assert user.username == "testuser"

    @pytest.mark.asyncio
    async def test_nested_transaction_reuses_connection(self, gateway: StoreGateway):
        async with gateway.transaction() as tx:
            async with tx.transaction() as inner:
                assert inner is tx
                assert inner.in_transaction
