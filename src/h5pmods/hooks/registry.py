"""
Hook Registry

Action/filter registration and dispatch modelled on the WordPress plugin
API the H5P plugin fires its extension points through.

Callbacks run in ascending priority; within a priority, in registration
order. Each callback receives only its first `accepted_args` arguments.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class H5PHook(str, Enum):
    """Extension points fired by the H5P plugin."""

    ALTER_LIBRARY_SEMANTICS = "h5p_alter_library_semantics"
    ALTER_FILTERED_PARAMETERS = "h5p_alter_filtered_parameters"
    ALTER_LIBRARY_SCRIPTS = "h5p_alter_library_scripts"
    ALTER_LIBRARY_STYLES = "h5p_alter_library_styles"
    EMBED_ACCESS = "h5p_embed_access"
    ALTER_USER_RESULT = "h5p_alter_user_result"


@dataclass
class _Registration:
    callback: Callable[..., Any]
    priority: int
    accepted_args: int
    seq: int


def _hook_name(hook: Any) -> str:
    return hook.value if isinstance(hook, Enum) else str(hook)


class HookRegistry:
    """Holds callbacks per hook and dispatches to them."""

    def __init__(self):
        self._hooks: Dict[str, List[_Registration]] = {}
        self._seq = 0

    def add_action(
        self,
        hook: Any,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """
        Register a callback for a hook.

        Args:
            hook: Hook name or H5PHook
            callback: Callable to run when the hook fires
            priority: Lower runs earlier
            accepted_args: How many of the hook's arguments to pass on
        """
        if accepted_args < 0:
            raise ValueError(f"accepted_args must be >= 0, got {accepted_args}")
        name = _hook_name(hook)
        self._seq += 1
        self._hooks.setdefault(name, []).append(
            _Registration(callback, priority, accepted_args, self._seq)
        )
        logger.debug(f"Registered {getattr(callback, '__name__', callback)} on {name} (priority {priority})")

    # Filters register exactly like actions
    add_filter = add_action

    def remove_action(self, hook: Any, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """Remove a callback registered with the given priority. Returns True if removed."""
        registrations = self._hooks.get(_hook_name(hook), [])
        for reg in registrations:
            if reg.callback == callback and reg.priority == priority:
                registrations.remove(reg)
                return True
        return False

    remove_filter = remove_action

    def has_hook(self, hook: Any, callback: Callable[..., Any] | None = None) -> bool:
        """True if the hook has any callback (or the given callback) registered."""
        registrations = self._hooks.get(_hook_name(hook), [])
        if callback is None:
            return bool(registrations)
        return any(reg.callback == callback for reg in registrations)

    def _ordered(self, name: str) -> List[_Registration]:
        return sorted(self._hooks.get(name, []), key=lambda reg: (reg.priority, reg.seq))

    def _call(self, name: str, reg: _Registration, args: tuple) -> Any:
        try:
            return reg.callback(*args[:reg.accepted_args])
        except Exception:
            logger.exception(f"Callback {getattr(reg.callback, '__name__', reg.callback)} failed on {name}")
            raise

    def do_action(self, hook: Any, *args: Any) -> None:
        """Run every callback for the hook; return values are ignored."""
        name = _hook_name(hook)
        registrations = self._ordered(name)
        logger.debug(f"do_action {name}: {len(registrations)} callback(s)")
        for reg in registrations:
            self._call(name, reg, args)

    def apply_filters(self, hook: Any, value: Any, *args: Any) -> Any:
        """
        Pass `value` through every callback for the hook.

        Each callback gets the current value followed by the extra args and
        returns the new value.

        Returns:
            Final value (unchanged when nothing is registered)
        """
        name = _hook_name(hook)
        registrations = self._ordered(name)
        logger.debug(f"apply_filters {name}: {len(registrations)} callback(s)")
        for reg in registrations:
            value = self._call(name, reg, (value, *args))
        return value
