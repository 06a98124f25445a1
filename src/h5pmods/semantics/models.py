"""
H5P Semantics Field Models

Typed representation of a library's semantics.json (the editor form
definition). Every field is one of three kinds:

- ListField: repeatable collection, holds one `field` template
- GroupField: fixed composite, holds ordered `fields`
- LeafField: anything else (text, number, boolean, select, library, ...)

Editor attributes the models don't declare (description, importance,
widget, min/max, ...) are kept as extras so a load/dump cycle is lossless.
"""
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, TypeAdapter


class _BaseField(BaseModel):
    """Attributes shared by all semantics fields."""
    model_config = ConfigDict(extra="allow")

    name: str
    type: str
    label: Optional[str] = None
    default: Any = None


class LeafField(_BaseField):
    """Terminal field without children (e.g. a text input)."""


class ListField(_BaseField):
    """Repeatable field; `field` describes the shape of each element."""
    type: str = "list"
    field: "SemanticsField"


class GroupField(_BaseField):
    """Composite field with an ordered set of named children."""
    type: str = "group"
    fields: list["SemanticsField"] = []


def _field_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    # Only list and group carry children, every other H5P type is a leaf
    return kind if kind in ("list", "group") else "leaf"


SemanticsField = Annotated[
    Union[
        Annotated[LeafField, Tag("leaf")],
        Annotated[ListField, Tag("list")],
        Annotated[GroupField, Tag("group")],
    ],
    Discriminator(_field_kind),
]

# A top-level semantics definition or any `fields` collection
SemanticsForest = list[SemanticsField]

ListField.model_rebuild()
GroupField.model_rebuild()

_forest_adapter = TypeAdapter(SemanticsForest)
_field_adapter = TypeAdapter(SemanticsField)


def load_semantics(data: Any) -> Any:
    """
    Parse semantics.json data into field models.

    Args:
        data: Decoded JSON - a list of fields (the usual top level) or a
            single field dict

    Returns:
        List of fields, or a single field when `data` is a dict

    Raises:
        pydantic.ValidationError: If a field is malformed (missing name,
            list without `field`, ...)
    """
    if isinstance(data, dict):
        return _field_adapter.validate_python(data)
    return _forest_adapter.validate_python(data)


def dump_semantics(tree: Any) -> Any:
    """
    Convert field models back to plain semantics.json data.

    Only keys present in the source data or assigned afterwards are
    written, so untouched fields come out the way they went in.
    """
    if isinstance(tree, list):
        return [dump_semantics(node) for node in tree]
    return tree.model_dump(exclude_unset=True)
