"""
Configuration for the H5P mods

Values come from the environment; a .env file in the working directory is
loaded first when present.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _split_ids(raw: str) -> frozenset[str]:
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass
class ModsConfig:
    """Settings used by the example mods and the score tracking API"""

    # Semantics
    collage_label: str = "Altered Label"

    # Score tracking script (path relative to the H5P upload folder or absolute)
    score_script_path: str = "/score-tracking.js"
    score_script_version: str = "?ver=1.2.3"  # Cache buster

    # Custom stylesheet
    style_url: str = "http://mydomain.org/custom-h5p-styling.css"
    style_version: str = "?ver=1.3.7"  # Cache buster

    # Content ids that may always be embedded
    embed_content_ids: frozenset[str] = field(default_factory=lambda: frozenset({"1"}))

    # Score tracking API
    api_host: str = "127.0.0.1"
    api_port: int = 8086

    def __post_init__(self):
        """Normalize ids and reject unusable values"""
        self.embed_content_ids = frozenset(str(i) for i in self.embed_content_ids)
        if not (0 < self.api_port < 65536):
            raise ValueError(f"API port out of range: {self.api_port}")

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "ModsConfig":
        """
        Build a config from H5PMODS_* environment variables.

        Args:
            env_file: Optional .env path; defaults to searching the working dir

        Raises:
            ValueError: If H5PMODS_API_PORT is not a number
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        defaults = cls()
        port = os.environ.get("H5PMODS_API_PORT", str(defaults.api_port))
        try:
            api_port = int(port)
        except ValueError:
            raise ValueError(f"H5PMODS_API_PORT must be a number, got {port!r}") from None

        ids = os.environ.get("H5PMODS_EMBED_CONTENT_IDS")

        return cls(
            collage_label=os.environ.get("H5PMODS_COLLAGE_LABEL", defaults.collage_label),
            score_script_path=os.environ.get("H5PMODS_SCORE_SCRIPT_PATH", defaults.score_script_path),
            score_script_version=os.environ.get("H5PMODS_SCORE_SCRIPT_VERSION", defaults.score_script_version),
            style_url=os.environ.get("H5PMODS_STYLE_URL", defaults.style_url),
            style_version=os.environ.get("H5PMODS_STYLE_VERSION", defaults.style_version),
            embed_content_ids=_split_ids(ids) if ids is not None else defaults.embed_content_ids,
            api_host=os.environ.get("H5PMODS_API_HOST", defaults.api_host),
            api_port=api_port,
        )
