"""Tests for input validation helpers."""

from types import MappingProxyType

import pytest

from bugtracker.core.exceptions import ValidationError
from bugtracker.models.bug import BugStatus
from bugtracker.utils.validators import (
    MAX_ID,
    Err,
    Ok,
    check_payload,
    check_update_payload,
    clean_text,
    is_int,
    is_valid_email,
    is_valid_username,
    missing_fields,
    parse_id,
    to_enum,
    unwrap,
)


class TestParseId:
    """Tests for identifier parsing."""

    @pytest.mark.parametrize("value,expected", [(1, 1), ("42", 42), (" 7 ", 7)])
    def test_valid(self, value, expected):
        assert parse_id(value) == Ok(expected)

    @pytest.mark.parametrize("value", [0, -3, "0", "abc", "1.5", None, True, 2.0])
    def test_invalid(self, value):
        result = parse_id(value, "bug ID")

        assert isinstance(result, Err)
        assert result.code == "INVALID_ID"
        assert result.message == "Invalid bug ID"

    @pytest.mark.parametrize("value", ["²", "١٢", "9" * 30, 2**31, -(2**31) - 1, 10**30])
    def test_rejects_non_ascii_and_out_of_range(self, value):
        assert parse_id(value) == Err("INVALID_ID", "Invalid ID")

    def test_largest_key(self):
        assert parse_id(str(MAX_ID)) == Ok(MAX_ID)

    def test_unwrap_non_ascii_digit_raises_validation_error(self):
        with pytest.raises(ValidationError):
            unwrap(parse_id("²"))


class TestUnwrap:
    """Tests for converting parse results."""

    def test_ok(self):
        assert unwrap(Ok("value")) == "value"

    def test_err_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            unwrap(Err("EMPTY_TEXT", "CommentText cannot be empty"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "EMPTY_TEXT"
        assert exc_info.value.detail["error"]["message"] == "CommentText cannot be empty"


class TestPayloadHelpers:
    """Tests for payload shape helpers."""

    def test_check_payload(self):
        assert check_payload({}, "comment") is None
        assert check_payload(None, "comment").code == "MISSING_PAYLOAD"
        assert check_payload("text", "comment").code == "INVALID_PAYLOAD"

    def test_check_update_payload(self):
        assert check_update_payload(MappingProxyType({"a": 1})) is None
        assert check_update_payload({}).code == "NO_UPDATE_DATA"
        assert check_update_payload(["a"]).code == "NO_UPDATE_DATA"

    def test_missing_fields_treats_null_as_missing(self):
        assert missing_fields({"a": 1, "b": None}, ("a", "b", "c")) == ["b", "c"]

    def test_is_int_excludes_bool(self):
        assert is_int(3)
        assert not is_int(False)
        assert not is_int("3")
        assert not is_int(MAX_ID + 1)

    def test_clean_text(self):
        assert clean_text("  hi  ") == "hi"
        assert clean_text(" \t\n ") is None

    def test_to_enum(self):
        assert to_enum(BugStatus, "in_progress") is BugStatus.IN_PROGRESS
        assert to_enum(BugStatus, "IN_PROGRESS") is None


class TestFormatValidators:
    """Tests for username and email checks."""

    @pytest.mark.parametrize(
        "email,valid",
        [
            ("user@example.com", True),
            ("first.last+tag@sub.example.org", True),
            ("no-at-sign", False),
            ("user@nodot", False),
            ("", False),
        ],
    )
    def test_email(self, email, valid):
        assert is_valid_email(email) is valid

    @pytest.mark.parametrize(
        "username,valid",
        [("dev_1", True), ("a-b", True), ("ab", False), ("has space", False), ("x" * 51, False)],
    )
    def test_username(self, username, valid):
        assert is_valid_username(username) is valid
