"""View base class and per-view configuration.

A view declares its templates and computed fields, plus optional defaults
that apply to every render_json() call made through it:

    class PostView(JsonView, fields=["id", "updated_at"], after_render="localize"):

        @template("post.json")
        def post(cls, post):
            return cls.render_json(
                post,
                ["title", "content", "excerpt", "cover"],
                ["like_count"],
                {"author": UserView, "comments": CommentView},
            )

        @computes("like_count")
        def like_count(cls, post):
            return len(post["likes"])

        @staticmethod
        def localize(data):
            ...

Defining the class registers it under its resource name ("post"), which is
the context key other views use when rendering a post as a relationship.
"""

from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from json_view import engine
from json_view.exceptions import (
    MissingComputeImplementationException,
    TemplateNotFoundException,
    ViewConfigurationException,
)
from json_view.logging_config import get_logger, log_with_context
from json_view.naming import derive_resource_name, is_valid_resource_name
from json_view.registry import get_registry

logger = get_logger(__name__)

_TEMPLATE_ATTR = "__json_view_template__"
_COMPUTES_ATTR = "__json_view_computes__"


class ViewConfig(BaseModel):
    """Default fields, custom fields and post-render hook of a view."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fields: tuple[str, ...] = ()
    custom_fields: tuple[str | tuple[str, Callable[[Any], Any]], ...] = ()
    after_render: Callable[[dict[str, Any]], Any] | None = None


def template(name: str) -> Callable[[Callable[..., Any]], classmethod]:
    """Mark a method as the handler of a template name.

    The handler is called as a classmethod with the render context unpacked
    as keyword arguments.
    """

    def decorator(func: Callable[..., Any]) -> classmethod:
        setattr(func, _TEMPLATE_ATTR, name)
        return classmethod(func)

    return decorator


def computes(field: str) -> Callable[[Callable[..., Any]], classmethod]:
    """Mark a method as the compute function of a custom field.

    The method is called as a classmethod with the whole record.
    """

    def decorator(func: Callable[..., Any]) -> classmethod:
        setattr(func, _COMPUTES_ATTR, field)
        return classmethod(func)

    return decorator


def _collect(cls: type, marker: str) -> dict[str, str]:
    """Map marked names to attribute names, honoring overrides along the MRO."""
    table: dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            func = attr.__func__ if isinstance(attr, (classmethod, staticmethod)) else attr
            key = getattr(func, marker, None)
            if key is not None:
                table[key] = attr_name
    return table


class JsonView:
    """Base class for views.

    Class keyword arguments:
        fields: Default fields prepended to every render_json() call
        custom_fields: Default custom fields prepended to every render_json() call
        after_render: Hook applied to the rendered dict; a callable, or the
            name of a static/class method of the view
        name: Explicit resource name instead of the one derived from the class name
        register: Set to False for abstract base views
    """

    view_config: ClassVar[ViewConfig] = ViewConfig()
    _templates: ClassVar[dict[str, str]] = {}
    _computed: ClassVar[dict[str, str]] = {}

    def __init_subclass__(
        cls,
        *,
        fields: Iterable[str] | None = None,
        custom_fields: Iterable[Any] | None = None,
        after_render: Callable[[dict[str, Any]], Any] | str | None = None,
        name: str | None = None,
        register: bool = True,
        **kwargs: Any,
    ):
        super().__init_subclass__(**kwargs)

        parent = cls.view_config
        if isinstance(after_render, str):
            hook = getattr(cls, after_render, None)
            if not callable(hook):
                raise ViewConfigurationException(
                    f"after_render hook '{after_render}' is not a method of {cls.__qualname__}",
                    details={"view": cls.__qualname__, "after_render": after_render},
                )
            after_render = hook

        try:
            cls.view_config = ViewConfig(
                fields=parent.fields if fields is None else tuple(fields),
                custom_fields=parent.custom_fields if custom_fields is None else tuple(custom_fields),
                after_render=parent.after_render if after_render is None else after_render,
            )
        except ValidationError as e:
            raise ViewConfigurationException(
                f"Invalid options for view {cls.__qualname__}",
                details={
                    "view": cls.__qualname__,
                    "errors": e.errors(include_url=False, include_context=False, include_input=False),
                },
            ) from e

        cls._templates = _collect(cls, _TEMPLATE_ATTR)
        cls._computed = _collect(cls, _COMPUTES_ATTR)

        if not register:
            return
        if name is None and not is_valid_resource_name(derive_resource_name(cls.__name__)):
            log_with_context(
                logger,
                "debug",
                "View not registered, class name has no resource name",
                view=cls.__qualname__,
                event_type="view_unregistered",
            )
            return
        get_registry().register(cls, name)

    @classmethod
    def render(cls, template_name: str, context: dict[str, Any]) -> Any:
        """Render a template with a context, e.g. render("user.json", {"user": user}).

        Raises:
            TemplateNotFoundException: If the view defines no such template
        """
        attr_name = cls._templates.get(template_name)
        if attr_name is None:
            raise TemplateNotFoundException(template_name, cls)
        return getattr(cls, attr_name)(**context)

    @classmethod
    def compute_field(cls, field: str, record: Any) -> Any:
        """Compute a custom field of a record.

        Raises:
            MissingComputeImplementationException: If no @computes method handles the field
        """
        attr_name = cls._computed.get(field)
        if attr_name is None:
            raise MissingComputeImplementationException(field, cls)
        return getattr(cls, attr_name)(record)

    @classmethod
    def render_json(
        cls,
        record: Any,
        fields: Iterable[str] = (),
        custom_fields: Iterable[engine.CustomFieldSpec] = (),
        relationships: engine.RelationshipSpec = (),
    ) -> Any:
        """Render a record with this view's defaults and after_render hook."""
        return engine.render(
            record,
            cls,
            fields=fields,
            custom_fields=custom_fields,
            relationships=relationships,
        )

    @classmethod
    def render_view(cls, record: Any, view: Any, template_name: str | None = None) -> Any:
        """Render a record (or list of records) through another view."""
        return engine.render_template(record, view, template_name)

    @classmethod
    def templates(cls) -> list[str]:
        return sorted(cls._templates)
