"""Tests for the user record validator."""

import pytest

from clerk_migration.services.validator import RecordValidator

from tests.fixtures import make_user


@pytest.fixture
def validator():
    return RecordValidator()


def test_valid_record_is_normalized(validator):
    user, errors = validator.validate_record(
        make_user("u1", password="$2a$10$hash", phoneNumber=["+15551234"], extra="ignored")
    )

    assert errors == []
    assert user.user_id == "u1"
    assert user.email == "u1@example.com"
    assert user.first_name == "Ada"
    assert user.password == "$2a$10$hash"
    assert user.phone_number == ["+15551234"]
    assert user.has_password


def test_optional_fields_may_be_absent(validator):
    user, errors = validator.validate_record({"userId": "u1", "email": "a@example.com"})

    assert errors == []
    assert user.first_name is None
    assert user.phone_number is None
    assert not user.has_password


def test_empty_password_counts_as_missing(validator):
    user, _ = validator.validate_record(make_user("u1", password=""))

    assert not user.has_password


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "@example.com", ""])
def test_invalid_email_is_rejected(validator, email):
    user, errors = validator.validate_record(make_user("u1", email=email))

    assert user is None
    assert [e.field for e in errors] == ["email"]


def test_missing_required_fields(validator):
    user, errors = validator.validate_record({"firstName": "Ada"})

    assert user is None
    assert {e.field for e in errors} == {"userId", "email"}
    assert all(e.error_type == "missing" for e in errors)


def test_wrong_types_are_rejected(validator):
    user, errors = validator.validate_record(make_user("u1", userId=42, phoneNumber=[5551234]))

    assert user is None
    assert {e.field for e in errors} == {"userId", "phoneNumber.0"}


def test_non_object_is_rejected(validator):
    user, errors = validator.validate_record(["u1"])

    assert user is None
    assert errors[0].error_type == "type"


def test_errors_serialize(validator):
    _, errors = validator.validate_record({"userId": "u1", "email": "bad"})

    data = errors[0].to_dict()
    assert data["field"] == "email"
    assert data["value"] == "bad"
    assert "message" in data


def test_is_valid(validator):
    assert validator.is_valid(make_user("u1"))
    assert not validator.is_valid({"userId": "u1"})


def test_field_names_are_not_accepted_as_keys(validator):
    user, errors = validator.validate_record({"user_id": "u1", "email": "a@example.com"})

    assert user is None
    assert [e.field for e in errors] == ["userId"]
