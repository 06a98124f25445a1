"""
H5P Mods

Example callbacks that alter how the H5P plugin works. `register_mods`
wires them to the plugin's hooks.
"""
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ModsConfig
from ..semantics import find_semantics_field, find_semantics_path
from .registry import DEFAULT_PRIORITY, H5PHook, HookRegistry

logger = logging.getLogger(__name__)

# Served by the host under ModsConfig.score_script_path
SCORE_TRACKING_SCRIPT = Path(__file__).resolve().parent.parent / "assets" / "score-tracking.js"


def alter_semantics(semantics: list, name: str, major_version: int, minor_version: int,
                    config: Optional[ModsConfig] = None) -> None:
    """
    Alter library semantics, i.e. how the editor looks and how content
    parameters are filtered.

    - H5P.Collage < 1.0: relabel the "collage" field
    - H5P.MultiChoice: answers are no longer shuffled by default

    Args:
        semantics: Top-level field list from load_semantics, altered in place.
            Raw semantics.json dicts are not searched.
        name: Machine readable library name
        major_version: First part of the version number
        minor_version: Second part of the version number
    """
    config = config or ModsConfig()

    if name == "H5P.Collage" and major_version < 1:
        field = find_semantics_field("collage", semantics)
        if field is not None:
            field.label = config.collage_label
            logger.debug(f"{name} {major_version}.{minor_version}: relabelled 'collage'")
        else:
            logger.warning(f"{name} {major_version}.{minor_version}: no 'collage' field in semantics")

    elif name == "H5P.MultiChoice":
        field = find_semantics_path("behaviour/randomAnswers", semantics)
        if field is not None:
            field.default = False
            logger.debug(f"{name} {major_version}.{minor_version}: randomAnswers off by default")
        else:
            logger.warning(f"{name} {major_version}.{minor_version}: no 'behaviour/randomAnswers' field in semantics")


def alter_parameters(parameters: Dict[str, Any], name: str, major_version: int, minor_version: int) -> None:
    """
    Alter content parameters after they were filtered through semantics.

    Adds a generation timestamp to the question of every multiple choice task.
    """
    if name == "H5P.MultiChoice":
        parameters["question"] = parameters.get("question", "") + f"<p>Generated at {int(time.time())}.</p>"


def alter_scripts(scripts: List[Dict[str, str]], libraries: Dict[str, Any], embed_type: str,
                  config: Optional[ModsConfig] = None) -> None:
    """
    Add the score tracking script for drag 'n drop tasks.

    Args:
        scripts: JavaScripts that will be loaded, appended to in place
        libraries: Libraries being loaded, keyed by machine name
        embed_type: div, iframe, external or editor
    """
    config = config or ModsConfig()
    if "H5P.DragQuestion" in libraries:
        scripts.append({
            "path": config.score_script_path,
            "version": config.score_script_version,
        })
        logger.debug(f"Added {config.score_script_path} ({embed_type})")


def alter_styles(styles: List[Dict[str, str]], libraries: Dict[str, Any], embed_type: str,
                 config: Optional[ModsConfig] = None) -> None:
    """Add the custom stylesheet to every H5P embed."""
    config = config or ModsConfig()
    styles.append({
        "path": config.style_url,
        "version": config.style_version,
    })


def embed_access(access: bool, content_id: Any, config: Optional[ModsConfig] = None) -> bool:
    """
    Change access to the embedded iframe content.

    Content in the configured id set can always be embedded.

    Returns:
        New access permission
    """
    config = config or ModsConfig()
    if str(content_id) in config.embed_content_ids:
        return True
    return access


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def alter_user_result(data: Dict[str, Any], result_id: Any, content_id: Any, user_id: Any) -> None:
    """Keep a saved score within 0..max_score."""
    score, max_score = data.get("score"), data.get("max_score")
    if not (_is_number(score) and _is_number(max_score)):
        logger.debug(f"Result {result_id}: score {score!r} / max_score {max_score!r} not numeric, left as is")
        return
    clamped = min(max(score, 0), max_score)
    if clamped != score:
        logger.debug(f"Result {result_id} (content {content_id}, user {user_id}): score {score} -> {clamped}")
        data["score"] = clamped


def register_mods(registry: HookRegistry, config: Optional[ModsConfig] = None) -> HookRegistry:
    """
    Register all mods on the registry.

    Args:
        registry: Registry the H5P hooks are fired through
        config: Settings for the mods (defaults when omitted)

    Returns:
        The same registry
    """
    config = config or ModsConfig()

    def _alter_semantics(semantics, name, major_version, minor_version):
        alter_semantics(semantics, name, major_version, minor_version, config=config)

    def _alter_scripts(scripts, libraries, embed_type):
        alter_scripts(scripts, libraries, embed_type, config=config)

    def _alter_styles(styles, libraries, embed_type):
        alter_styles(styles, libraries, embed_type, config=config)

    def _embed_access(access, content_id):
        return embed_access(access, content_id, config=config)

    registry.add_action(H5PHook.ALTER_LIBRARY_SEMANTICS, _alter_semantics, DEFAULT_PRIORITY, 4)
    registry.add_action(H5PHook.ALTER_FILTERED_PARAMETERS, alter_parameters, DEFAULT_PRIORITY, 4)
    registry.add_action(H5PHook.ALTER_LIBRARY_SCRIPTS, _alter_scripts, DEFAULT_PRIORITY, 3)
    registry.add_action(H5PHook.ALTER_LIBRARY_STYLES, _alter_styles, DEFAULT_PRIORITY, 3)
    registry.add_filter(H5PHook.EMBED_ACCESS, _embed_access, DEFAULT_PRIORITY, 2)
    registry.add_action(H5PHook.ALTER_USER_RESULT, alter_user_result, DEFAULT_PRIORITY, 4)

    return registry
