"""Custom exceptions for json_view with structured error codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    JSON_VIEW_ERROR = "JSON_VIEW_ERROR"

    # Render errors
    MISSING_COMPUTE = "MISSING_COMPUTE"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # Configuration errors
    UNRESOLVABLE_VIEW_NAME = "UNRESOLVABLE_VIEW_NAME"
    VIEW_CONFIG_ERROR = "VIEW_CONFIG_ERROR"


class JsonViewException(Exception):
    """Base exception for view rendering errors.

    All custom exceptions inherit from this class so callers (and the
    FastAPI error handler) can catch rendering failures in one place.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.JSON_VIEW_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize view exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code used when surfaced through the web layer
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def _view_label(view: Any) -> str:
    if view is None:
        return "None"
    if isinstance(view, str):
        return view
    if isinstance(view, type):
        return view.__qualname__
    return type(view).__qualname__


class MissingComputeImplementationException(JsonViewException):
    """A custom field has no compute function on the view."""

    def __init__(self, field: str, view: Any = None):
        super().__init__(
            f"No compute implementation for custom field '{field}' on view {_view_label(view)}",
            code=ErrorCode.MISSING_COMPUTE,
            details={"field": field, "view": _view_label(view)},
        )
        self.field = field


class UnresolvableViewNameException(JsonViewException):
    """A view cannot be mapped to a known resource name."""

    def __init__(self, view: Any, reason: str = "view is not registered"):
        super().__init__(
            f"Cannot resolve resource name for view {_view_label(view)}: {reason}",
            code=ErrorCode.UNRESOLVABLE_VIEW_NAME,
            details={"view": _view_label(view), "reason": reason},
        )


class TemplateNotFoundException(JsonViewException):
    """A view was asked to render a template it does not define."""

    def __init__(self, template: str, view: Any):
        super().__init__(
            f"View {_view_label(view)} has no template '{template}'",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            details={"template": template, "view": _view_label(view)},
        )
        self.template = template


class ViewConfigurationException(JsonViewException):
    """Invalid view options or relationship spec."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.VIEW_CONFIG_ERROR, details=details)
