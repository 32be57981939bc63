"""Unit tests for the view registry."""

import logging
import threading

import pytest

from json_view.exceptions import UnresolvableViewNameException, ViewConfigurationException
from json_view.registry import ViewRegistry, validate_relationships


class UserView:
    @staticmethod
    def render(template, context):
        return context


class OtherUserView:
    @staticmethod
    def render(template, context):
        return context


@pytest.fixture
def registry():
    """A registry separate from the process-wide one."""
    return ViewRegistry()


class TestViewRegistry:
    """Tests for ViewRegistry."""

    def test_register_derives_name(self, registry):
        """Test registration derives the resource name from the class name."""
        assert registry.register(UserView) == "user"
        assert registry.resource_name_for(UserView) == "user"
        assert registry.get("user") is UserView
        assert UserView in registry

    def test_register_explicit_name(self, registry):
        """Test an explicit name is used as is."""
        registry.register(UserView, "member")

        assert registry.resource_name_for(UserView) == "member"

    def test_register_invalid_name_raises(self, registry):
        """Test names that are not identifiers are rejected."""
        with pytest.raises(UnresolvableViewNameException):
            registry.register(UserView, "not a name")

    def test_register_instance(self, registry):
        """Test view objects are named after their class."""
        view = UserView()

        assert registry.register(view) == "user"
        assert registry.resolve("user") is view

    def test_unknown_view_raises(self, registry):
        """Test unregistered views are unresolvable."""
        with pytest.raises(UnresolvableViewNameException):
            registry.resource_name_for(UserView)

    def test_unhashable_view_raises(self, registry):
        """Test unhashable objects are unresolvable instead of crashing."""
        with pytest.raises(UnresolvableViewNameException):
            registry.resource_name_for({"not": "a view"})

    def test_unknown_name_raises(self, registry):
        """Test unknown names are unresolvable."""
        with pytest.raises(UnresolvableViewNameException) as exc_info:
            registry.get("ghost")

        assert exc_info.value.details["view"] == "ghost"

    def test_name_collision_logs_warning(self, registry, caplog):
        """Test a second view with the same name replaces the first and warns."""
        registry.register(UserView)

        with caplog.at_level(logging.WARNING, logger="json_view.registry"):
            registry.register(OtherUserView, "user")

        assert registry.get("user") is OtherUserView
        assert registry.resource_name_for(UserView) == "user"
        assert any(record.event_type == "view_name_collision" for record in caplog.records)

    def test_names_and_clear(self, registry):
        """Test names() lists registered names and clear() empties the registry."""
        registry.register(UserView)
        registry.register(OtherUserView, "other")

        assert registry.names() == ["other", "user"]

        registry.clear()

        assert registry.names() == []
        assert UserView not in registry

    def test_snapshot_and_restore(self, registry):
        """Test restore() undoes registrations made after snapshot()."""
        registry.register(UserView)
        state = registry.snapshot()

        registry.register(OtherUserView, "user")
        registry.register(OtherUserView, "other")
        registry.restore(state)

        assert registry.names() == ["user"]
        assert registry.get("user") is UserView
        assert OtherUserView not in registry

    def test_concurrent_registration(self, registry):
        """Test registrations from several threads are all recorded."""
        views = [type(f"Thread{i}View", (), {}) for i in range(20)]

        threads = [threading.Thread(target=registry.register, args=(view,)) for view in views]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry.names()) == 20


class TestValidateRelationships:
    """Tests for validate_relationships()."""

    def test_valid_spec(self, address_view):
        """Test a spec of registered views passes."""
        validate_relationships({"address": address_view, "home": (address_view, "custom_address.json")})
        validate_relationships([("address", "address")])

    def test_unregistered_view_fails(self, address_view):
        """Test the first unregistered view is reported."""
        with pytest.raises(UnresolvableViewNameException):
            validate_relationships({"address": address_view, "owner": UserView})

    def test_malformed_spec_fails(self):
        """Test malformed entries are reported."""
        with pytest.raises(ViewConfigurationException):
            validate_relationships([("address",)])
