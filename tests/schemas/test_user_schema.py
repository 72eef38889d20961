"""UserPayload validation — bounds, stripping and email normalization.

Invariants:
    - name/address stripped; whitespace-only rejected
    - email stripped and lower-cased; must look like local@domain.tld
    - UserResponse builds from ORM attributes
"""

import pytest
from pydantic import ValidationError

from dogproxy.models.user import User
from dogproxy.schemas.user import UserPayload, UserResponse


def test_payload_strips_and_lowercases():
    payload = UserPayload(name="  Ada ", email=" ADA@Example.com ", address=" London ")
    assert payload.name == "Ada"
    assert payload.email == "ada@example.com"
    assert payload.address == "London"


@pytest.mark.parametrize("email", ["plain", "a@b", "two@@example.com", "sp ace@example.com"])
def test_payload_rejects_malformed_email(email):
    with pytest.raises(ValidationError):
        UserPayload(name="Ada", email=email, address="London")


def test_payload_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        UserPayload(name="   ", email="ada@example.com", address="London")


def test_payload_rejects_overlong_name():
    with pytest.raises(ValidationError):
        UserPayload(name="x" * 101, email="ada@example.com", address="London")


def test_payload_requires_all_fields():
    with pytest.raises(ValidationError):
        UserPayload(name="Ada", email="ada@example.com")


def test_response_from_orm_object():
    user = User(id=7, name="Ada", email="ada@example.com", address="London")
    assert UserResponse.model_validate(user).model_dump() == {
        "id": 7, "name": "Ada", "email": "ada@example.com", "address": "London",
    }
