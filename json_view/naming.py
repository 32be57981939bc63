"""Naming convention that maps a view to its input key and default template.

    UserView          -> user           -> "user.json"
    BasicProfileView  -> basic_profile  -> "basic_profile.json"
    HTTPServerView    -> http_server    -> "http_server.json"

Derivation is a pure string function. Looking up the key of a view goes
through the view registry, which only knows names recorded when the view
was defined, so no key is ever invented during rendering.
"""

import keyword
import re
from typing import Any

from json_view.config import get_settings

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase name to snake_case."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def simple_name(view: Any) -> str:
    """Last segment of a view's name (class name, or class of an instance)."""
    if isinstance(view, type):
        return view.__name__
    return type(view).__name__


def derive_resource_name(name: str, suffix: str | None = None) -> str:
    """Derive the input key from a view's simple name.

    Only one trailing suffix segment is stripped. The result may be empty or
    not a valid identifier; callers decide whether that is acceptable.
    """
    if suffix is None:
        suffix = get_settings().view_suffix
    key = underscore(name)
    if key == suffix:
        return ""
    trailing = f"_{suffix}"
    if key.endswith(trailing):
        key = key[: -len(trailing)]
    return key


def is_valid_resource_name(name: str) -> bool:
    """Resource names become keyword arguments of template handlers, so keywords are excluded."""
    return bool(name) and name.isidentifier() and not keyword.iskeyword(name)


def template_for(resource_name: str) -> str:
    """Default template name for a resource key (e.g. "user.json")."""
    return f"{resource_name}{get_settings().template_extension}"


def resource_name(view: Any) -> str:
    """Registered input key of a view.

    Raises:
        UnresolvableViewNameException: If the view was never registered
    """
    from json_view.registry import get_registry

    return get_registry().resource_name_for(view)


def default_template(view: Any) -> str:
    return template_for(resource_name(view))
