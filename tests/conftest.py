"""Pytest configuration and shared fixtures."""

import copy

import pytest

from json_view import JsonView, computes, get_registry, template
from json_view.config import reset_settings


class AddressView(JsonView):
    """Renders nested address records."""

    @template("address.json")
    def address(cls, address):
        return cls.render_json(address, ["ward", "district", "city"])

    @template("custom_address.json")
    def custom_address(cls, address):
        return cls.render_json(address, [], [("full_address", cls.full_address)])

    @staticmethod
    def full_address(address):
        return f"{address['ward']}, {address['district']}, {address['city']}"


class PersonView(JsonView):
    """View without defaults; computes is_teenager."""

    @template("person.json")
    def person(cls, person):
        return cls.render_json(person, ["name", "age", "email"], ["is_teenager"], {"address": AddressView})

    @computes("is_teenager")
    def is_teenager(cls, person):
        return person["age"] < 20


def censor_email(data):
    if data.get("email") is not None:
        return {**data, "email": "xxx@example.com"}
    return data


class AccountView(
    JsonView,
    fields=["id"],
    custom_fields=[("has_email", lambda data: data.get("email") is not None)],
    after_render=censor_email,
):
    """View with default fields, a default inline custom field and a hook."""

    @template("account.json")
    def account(cls, account):
        return cls.render_json(account, ["name", "email"])

    @computes("has_email")
    def has_email(cls, account):
        return "NO" if account["email"] is None else "YES"


PERSON = {
    "name": "John Doe",
    "age": 20,
    "email": "test@gmail.com",
    "address": {
        "ward": "Ben Nghe",
        "district": "1",
        "city": "HCM",
    },
}


@pytest.fixture
def person():
    """A person record with a loaded address; safe to modify."""
    return copy.deepcopy(PERSON)


@pytest.fixture
def account():
    """An account record for views with defaults and hooks."""
    return {"id": 1001, **copy.deepcopy(PERSON)}


@pytest.fixture
def address_view():
    return AddressView


@pytest.fixture
def person_view():
    return PersonView


@pytest.fixture
def account_view():
    return AccountView


@pytest.fixture(autouse=True)
def isolated_registry():
    """Undo view registrations made during a test."""
    registry = get_registry()
    state = registry.snapshot()
    yield registry
    registry.restore(state)


@pytest.fixture
def clean_settings():
    """Reset the settings singleton before and after a test."""
    reset_settings()
    yield
    reset_settings()
