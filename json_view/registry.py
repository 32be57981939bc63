"""Registry of views and their resource names.

Views are recorded once, when they are defined (JsonView subclasses register
themselves) or through register_view() for hand-written view objects. The
registry answers two questions during rendering: which input key a view
expects, and which view a string reference in a relationship spec names.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from json_view.exceptions import UnresolvableViewNameException
from json_view.logging_config import get_logger, log_with_context
from json_view.naming import derive_resource_name, is_valid_resource_name, simple_name

logger = get_logger(__name__)


class ViewRegistry:
    """Thread-safe mapping between views and resource names."""

    def __init__(self):
        self._names: dict[Any, str] = {}
        self._views: dict[str, Any] = {}
        self._lock = threading.Lock()

    def register(self, view: Any, name: str | None = None) -> str:
        """Record a view and return its resource name.

        Args:
            view: View class or object exposing render(template, context)
            name: Explicit resource name; derived from the view's name when None

        Raises:
            UnresolvableViewNameException: If the name is empty or not an identifier
        """
        if name is None:
            name = derive_resource_name(simple_name(view))
        if not is_valid_resource_name(name):
            raise UnresolvableViewNameException(view, f"'{name}' is not a valid resource name")

        with self._lock:
            previous = self._views.get(name)
            self._names[view] = name
            self._views[name] = view

        if previous is not None and previous is not view:
            log_with_context(
                logger,
                "warning",
                "Resource name registered by more than one view",
                resource_name=name,
                view=simple_name(view),
                previous_view=simple_name(previous),
                event_type="view_name_collision",
            )
        else:
            log_with_context(
                logger,
                "debug",
                "View registered",
                resource_name=name,
                view=simple_name(view),
                event_type="view_registered",
            )
        return name

    def resource_name_for(self, view: Any) -> str:
        """Return the recorded resource name of a view.

        Raises:
            UnresolvableViewNameException: If the view was never registered
        """
        try:
            with self._lock:
                return self._names[view]
        except (KeyError, TypeError):
            raise UnresolvableViewNameException(view) from None

    def get(self, name: str) -> Any:
        """Return the view registered under a resource name.

        Raises:
            UnresolvableViewNameException: If no view has that name
        """
        with self._lock:
            view = self._views.get(name)
        if view is None:
            raise UnresolvableViewNameException(name, "no view registered under this name")
        return view

    def resolve(self, view: Any) -> Any:
        """Turn a view reference (view or registered name) into a view."""
        if isinstance(view, str):
            return self.get(view)
        return view

    def __contains__(self, view: Any) -> bool:
        with self._lock:
            try:
                return view in self._names
            except TypeError:
                return False

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._views)

    def clear(self) -> None:
        with self._lock:
            self._names.clear()
            self._views.clear()

    def snapshot(self) -> tuple[dict[Any, str], dict[str, Any]]:
        """Copy of the current registrations, for restore()."""
        with self._lock:
            return dict(self._names), dict(self._views)

    def restore(self, state: tuple[dict[Any, str], dict[str, Any]]) -> None:
        """Replace the registrations with a snapshot()."""
        names, views = state
        with self._lock:
            self._names = dict(names)
            self._views = dict(views)


_registry = ViewRegistry()


def get_registry() -> ViewRegistry:
    """Get the process-wide view registry."""
    return _registry


def register_view(view: Any, name: str | None = None) -> Any:
    """Register a hand-written view; usable as a class decorator."""
    _registry.register(view, name)
    return view


def validate_relationships(relationships: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
    """Check up front that every view in a relationship spec has a known resource name.

    Raises:
        UnresolvableViewNameException: For the first view that cannot be resolved
        ViewConfigurationException: If the spec itself is malformed
    """
    from json_view.engine import iter_relationships

    for _field, view, _template in iter_relationships(relationships):
        _registry.resource_name_for(_registry.resolve(view))
