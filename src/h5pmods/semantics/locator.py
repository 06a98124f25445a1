"""
Semantics Tree Locator

Finds a single field inside a semantics tree, either by its slash
separated path from the root or by bare name anywhere in the tree.

Both lookups return the node object from the caller's tree (not a copy),
so a mod can change label/default on the result and the change lands in
the semantics the editor receives.
"""
from typing import Optional, Sequence, Union

from .models import GroupField, LeafField, ListField

SemanticsNode = Union[LeafField, ListField, GroupField]
SemanticsTree = Union[Sequence[SemanticsNode], SemanticsNode]


def find_semantics_path(path: str, tree: SemanticsTree) -> Optional[SemanticsNode]:
    """
    Find a field by its path, e.g. "answers/answer/text".

    List and group fields consume the path segment that names them. A list
    template may be left out of the path, so "answers/answer/text" also
    reaches "text" when the "answer" list's template is named otherwise.

    Args:
        path: Slash separated field names, leading/trailing slashes ignored
        tree: Top-level field list or a single field

    Returns:
        First field (document order) whose full path matches, else None
    """
    segments = path.strip("/").split("/")
    if segments == [""]:
        return None
    return _find_path(segments, tree)


def _find_path(segments: list[str], tree: SemanticsTree) -> Optional[SemanticsNode]:
    if isinstance(tree, (list, tuple)):
        for node in tree:
            if getattr(node, "name", None) == segments[0]:
                # First sibling with the name wins, even if the rest of the path misses
                return _find_path(segments, node)
        return None

    if len(segments) == 1 and getattr(tree, "name", None) == segments[0]:
        return tree

    # A container consumes a segment only when it names it; an unnamed list
    # template passes the path through unchanged
    if isinstance(tree, ListField):
        rest = segments[1:] if tree.name == segments[0] else segments
        return _find_path(rest, tree.field)
    if isinstance(tree, GroupField):
        rest = segments[1:] if tree.name == segments[0] else segments
        return _find_path(rest, tree.fields)
    return None


def find_semantics_field(field: str, tree: SemanticsTree) -> Optional[SemanticsNode]:
    """
    Find the first field named `field` at any depth (pre-order, depth first).

    Args:
        field: Bare field name
        tree: Top-level field list or a single field

    Returns:
        First matching field, else None
    """
    if isinstance(tree, (list, tuple)):
        for node in tree:
            found = find_semantics_field(field, node)
            if found is not None:
                return found
        return None

    if not isinstance(tree, (LeafField, ListField, GroupField)):
        return None
    if tree.name == field:
        return tree

    if isinstance(tree, ListField):
        return find_semantics_field(field, tree.field)
    if isinstance(tree, GroupField):
        return find_semantics_field(field, tree.fields)
    return None
