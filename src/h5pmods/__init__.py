"""
H5P Mods

Alters the way the H5P plugin works: editor semantics, content parameters,
extra scripts/styles, embed access and saved results.
"""

from .config import ModsConfig
from .semantics import (
    LeafField,
    ListField,
    GroupField,
    load_semantics,
    dump_semantics,
    find_semantics_path,
    find_semantics_field,
)
from .hooks import H5PHook, HookRegistry, register_mods

__version__ = "0.1.0"

__all__ = [
    "ModsConfig",
    # Semantics
    "LeafField",
    "ListField",
    "GroupField",
    "load_semantics",
    "dump_semantics",
    "find_semantics_path",
    "find_semantics_field",
    # Hooks
    "H5PHook",
    "HookRegistry",
    "register_mods",
]
