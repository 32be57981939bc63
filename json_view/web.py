"""FastAPI integration: JSON responses rendered by views, and error handlers."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from json_view import engine
from json_view.exceptions import JsonViewException
from json_view.logging_config import get_logger, log_with_context
from json_view.registry import get_registry

logger = get_logger(__name__)


def view_response(view: Any, template: str, context: dict[str, Any], status_code: int = 200) -> JSONResponse:
    """Render a view template into a JSONResponse.

    Args:
        view: View (or registered view name) to render with
        template: Template name, e.g. "user.json"
        context: Render context, e.g. {"user": user}
        status_code: HTTP status code of the response

    Returns:
        JSONResponse with the rendered data (``null`` body when the view renders None)
    """
    view = get_registry().resolve(view)
    data = view.render(template, context)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def record_response(record: Any, view: Any, template: str | None = None, status_code: int = 200) -> JSONResponse:
    """Render a record (or list of records) through a view into a JSONResponse."""
    data = engine.render_template(record, view, template)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


async def json_view_exception_handler(request: Request, exc: JsonViewException) -> JSONResponse:
    """Turn rendering errors into structured JSON error responses."""
    log_with_context(
        logger,
        "error",
        "View rendering failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="json_view_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": jsonable_encoder(error_content)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register json_view exception handlers with the application."""
    app.add_exception_handler(JsonViewException, json_view_exception_handler)
