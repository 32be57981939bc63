"""Render engine: turns records into plain dicts ready for JSON.

A render merges three sources, in this order:

1. ``fields``: copied verbatim from the record (missing keys are skipped)
2. ``custom_fields``: computed by the view, or by an inline function
3. ``relationships``: nested records rendered through another view

A later source overwrites an earlier one when both produce the same key.

Relationship targets are written as::

    relationships = {"comments": CommentView, "author": UserView}
    # or pick a template instead of the default "user.json"
    relationships = {"author": (UserView, "basic_profile.json")}
    # views can also be referenced by registered resource name
    relationships = {"author": "user"}

which is equivalent to::

    {
        "comments": render_many(post["comments"], CommentView, "comment.json"),
        "author": render_one(post["author"], UserView, "user.json"),
    }
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any

from json_view.exceptions import MissingComputeImplementationException, ViewConfigurationException
from json_view.naming import resource_name, template_for
from json_view.registry import get_registry
from json_view.shapes import MISSING, RelationshipShape, classify, get_value

CustomFieldSpec = str | tuple[str, Callable[[Any], Any]]
RelationshipSpec = Mapping[str, Any] | Iterable[tuple[str, Any]]


def render_fields(record: Any, fields: Iterable[str]) -> dict[str, Any]:
    """Take the listed fields from the record without modifying the values."""
    data = {}
    for field in fields:
        value = get_value(record, field)
        if value is not MISSING:
            data[field] = value
    return data


def render_custom_fields(record: Any, view: Any, custom_fields: Iterable[CustomFieldSpec]) -> dict[str, Any]:
    """Render computed fields.

    A ``(name, fn)`` entry calls ``fn(record)``. A bare name is computed by
    ``view.compute_field(name, record)``.

    Raises:
        MissingComputeImplementationException: If a bare name has no compute function
        ViewConfigurationException: If an entry is neither a name nor a (name, fn) pair
    """
    if view is not None:
        view = get_registry().resolve(view)

    data = {}
    for spec in custom_fields:
        if isinstance(spec, (tuple, list)):
            if len(spec) != 2 or not isinstance(spec[0], str) or not callable(spec[1]):
                raise ViewConfigurationException(
                    "Custom field entries must be a name or a (name, function) pair",
                    details={"entry": repr(spec)},
                )
            field, func = spec
            data[field] = func(record)
            continue
        if not isinstance(spec, str):
            raise ViewConfigurationException(
                "Custom field entries must be a name or a (name, function) pair",
                details={"entry": repr(spec)},
            )

        compute = getattr(view, "compute_field", None)
        if compute is None:
            raise MissingComputeImplementationException(spec, view)
        data[spec] = compute(spec, record)
    return data


def iter_relationships(relationships: RelationshipSpec) -> Iterator[tuple[str, Any, str | None]]:
    """Normalize a relationship spec into ``(field, view, template)`` triples.

    Raises:
        ViewConfigurationException: If an entry is not a field/target pair
    """
    items = relationships.items() if isinstance(relationships, Mapping) else relationships
    for item in items:
        try:
            field, target = item
        except (TypeError, ValueError):
            raise ViewConfigurationException(
                "Relationship entries must be (field, view) pairs",
                details={"entry": repr(item)},
            ) from None

        if isinstance(target, tuple):
            if len(target) != 2 or not isinstance(target[1], str):
                raise ViewConfigurationException(
                    "Relationship targets with a template must be (view, template_name)",
                    details={"field": field, "target": repr(target)},
                )
            yield field, target[0], target[1]
        else:
            yield field, target, None


def render_relationships(record: Any, relationships: RelationshipSpec) -> dict[str, Any]:
    """Render every relationship field through its target view."""
    return {
        field: render_relationship(record, field, view, template)
        for field, view, template in iter_relationships(relationships)
    }


def render_relationship(record: Any, field: str, view: Any, template: str | None = None) -> Any:
    """Render one relationship field; a missing field renders like None."""
    value = get_value(record, field, None)
    return render_template(value, view, template)


def render_template(resource: Any, view: Any, template: str | None = None) -> Any:
    """Decide how to render a related value from its runtime shape.

    Not-loaded relations, None and unrecognized values render to None, a
    single record goes through render_one and a list through render_many.
    """
    view = get_registry().resolve(view)
    if template is None:
        template = template_for(resource_name(view))

    shape = classify(resource)
    if shape is RelationshipShape.ONE:
        return render_one(resource, view, template)
    elif shape is RelationshipShape.MANY:
        return render_many(resource, view, template)
    elif shape in (RelationshipShape.ABSENT, RelationshipShape.NOT_LOADED, RelationshipShape.OTHER):
        return None
    raise AssertionError(f"Unhandled relationship shape: {shape}")


def render_one(resource: Any, view: Any, template: str | None = None) -> Any:
    """Render a single record, similar to Phoenix's ``render_one/3``.

    Calls ``view.render(template, {resource_name: resource})``::

        render_one(user, UserView, "user.json")
        # invokes
        UserView.render("user.json", {"user": user})
    """
    view = get_registry().resolve(view)
    name = resource_name(view)
    if template is None:
        template = template_for(name)
    return view.render(template, {name: resource})


def render_many(resources: Sequence[Any], view: Any, template: str | None = None) -> list[Any]:
    """Render each record of a sequence, keeping order."""
    return [render_one(resource, view, template) for resource in resources]


def render_json(
    record: Any,
    view: Any = None,
    *,
    fields: Iterable[str] = (),
    custom_fields: Iterable[CustomFieldSpec] = (),
    relationships: RelationshipSpec = (),
) -> dict[str, Any] | None:
    """Render a record to a dict, without view defaults or hooks.

    Args:
        record: Record to render; None renders to None
        view: View used to compute bare custom field names
        fields: Fields copied verbatim
        custom_fields: Computed fields (names or (name, fn) pairs)
        relationships: Fields rendered through another view
    """
    if record is None:
        return None

    data = render_fields(record, fields)
    data.update(render_custom_fields(record, view, custom_fields))
    data.update(render_relationships(record, relationships))
    return data


def render(
    record: Any,
    view: Any,
    *,
    fields: Iterable[str] = (),
    custom_fields: Iterable[CustomFieldSpec] = (),
    relationships: RelationshipSpec = (),
) -> Any:
    """Render a record through a view, applying the view's configuration.

    The view's default fields and custom fields are placed before the
    call-time ones, then the merged dict is passed to the view's
    ``after_render`` hook when one is configured. The hook's return value is
    returned as is.
    """
    if record is None:
        return None

    view = get_registry().resolve(view)
    config = getattr(view, "view_config", None)
    if config is not None:
        fields = [*config.fields, *fields]
        custom_fields = [*config.custom_fields, *custom_fields]

    data = render_json(record, view, fields=fields, custom_fields=custom_fields, relationships=relationships)

    if config is not None and config.after_render is not None:
        return config.after_render(data)
    return data
