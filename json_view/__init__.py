"""Render records to JSON-ready dicts through composable views."""

from importlib.metadata import PackageNotFoundError, version

from json_view.engine import (
    render,
    render_custom_fields,
    render_fields,
    render_json,
    render_many,
    render_one,
    render_relationship,
    render_relationships,
    render_template,
)
from json_view.exceptions import (
    ErrorCode,
    JsonViewException,
    MissingComputeImplementationException,
    TemplateNotFoundException,
    UnresolvableViewNameException,
    ViewConfigurationException,
)
from json_view.naming import default_template, resource_name
from json_view.registry import ViewRegistry, get_registry, register_view, validate_relationships
from json_view.sentinels import NOT_LOADED, NotLoaded
from json_view.view import JsonView, ViewConfig, computes, template

try:
    __version__ = version("json-view")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "NOT_LOADED",
    "ErrorCode",
    "JsonView",
    "JsonViewException",
    "MissingComputeImplementationException",
    "NotLoaded",
    "TemplateNotFoundException",
    "UnresolvableViewNameException",
    "ViewConfig",
    "ViewConfigurationException",
    "ViewRegistry",
    "computes",
    "default_template",
    "get_registry",
    "register_view",
    "render",
    "render_custom_fields",
    "render_fields",
    "render_json",
    "render_many",
    "render_one",
    "render_relationship",
    "render_relationships",
    "render_template",
    "resource_name",
    "template",
    "validate_relationships",
]
