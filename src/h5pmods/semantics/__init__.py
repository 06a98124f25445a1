"""
H5P Semantics

Field models for semantics.json and lookups into the field tree.
"""

from .models import (
    LeafField,
    ListField,
    GroupField,
    SemanticsField,
    SemanticsForest,
    load_semantics,
    dump_semantics,
)
from .locator import (
    SemanticsNode,
    SemanticsTree,
    find_semantics_path,
    find_semantics_field,
)

__all__ = [
    # Models
    "LeafField",
    "ListField",
    "GroupField",
    "SemanticsField",
    "SemanticsForest",
    "load_semantics",
    "dump_semantics",
    # Lookups
    "SemanticsNode",
    "SemanticsTree",
    "find_semantics_path",
    "find_semantics_field",
]
