"""
H5P Hooks

Registry for the H5P plugin's extension points and the mods hooked into them.
"""

from .registry import DEFAULT_PRIORITY, H5PHook, HookRegistry
from .mods import (
    SCORE_TRACKING_SCRIPT,
    alter_semantics,
    alter_parameters,
    alter_scripts,
    alter_styles,
    embed_access,
    alter_user_result,
    register_mods,
)

__all__ = [
    # Registry
    "DEFAULT_PRIORITY",
    "H5PHook",
    "HookRegistry",
    # Mods
    "SCORE_TRACKING_SCRIPT",
    "alter_semantics",
    "alter_parameters",
    "alter_scripts",
    "alter_styles",
    "embed_access",
    "alter_user_result",
    "register_mods",
]
