"""
Rendering settings.

Loads rendering_config.yaml (shipped next to this module) and merges an
optional override file on top. The override path comes from the caller or
from the SCITEXT_CONFIG_PATH environment variable (.env files are honoured).

Examples:
    >>> settings = load_rendering_settings()
    >>> settings.max_content_length
    100000
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).parent / "rendering_config.yaml"
CONFIG_PATH_ENV_VAR = "SCITEXT_CONFIG_PATH"


@dataclass(frozen=True)
class RenderingSettings:
    """
    Immutable rendering settings.

    Attributes:
        max_content_length: Longest accepted input
        placeholder_prefix: Token prefix for inline math/SMILES placeholders
        environment_placeholder_prefix: Token prefix for nested environments in lists
        smiles_max_length: Longest accepted SMILES code
        math_environments: Environments rendered as display math
        list_environments: Environments with dedicated list markup
        markdown_preset: markdown-it preset name
        markdown_extensions: markdown-it rules enabled on top of the preset
    """

    max_content_length: int = 100000
    placeholder_prefix: str = "SCITEXTPLACEHOLDER"
    environment_placeholder_prefix: str = "SCITEXTENVPLACEHOLDER"
    smiles_max_length: int = 1000
    math_environments: Tuple[str, ...] = ()
    list_environments: Tuple[str, ...] = ("itemize", "enumerate", "description")
    markdown_preset: str = "commonmark"
    markdown_extensions: Tuple[str, ...] = ("table", "strikethrough")


def _resolve_override_path(config_path: Optional[Path]) -> Optional[Path]:
    if config_path is not None:
        return Path(config_path)
    env_value = os.getenv(CONFIG_PATH_ENV_VAR)
    return Path(env_value) if env_value else None


def load_rendering_settings(config_path: Optional[Path] = None) -> RenderingSettings:
    """
    Load settings from the packaged YAML plus an optional override file.

    Args:
        config_path: Override YAML (defaults to SCITEXT_CONFIG_PATH, if set)

    Returns:
        RenderingSettings

    Raises:
        FileNotFoundError: If an override path is given but does not exist
    """
    merged = OmegaConf.load(DEFAULT_CONFIG_PATH)

    override_path = _resolve_override_path(config_path)
    if override_path is not None:
        if not override_path.exists():
            raise FileNotFoundError(f"Rendering config not found: {override_path}")
        merged = OmegaConf.merge(merged, OmegaConf.load(override_path))

    data = OmegaConf.to_container(merged, resolve=True)
    markdown = data.get("markdown", {})

    return RenderingSettings(
        max_content_length=int(data["max_content_length"]),
        placeholder_prefix=data["placeholder_prefix"],
        environment_placeholder_prefix=data["environment_placeholder_prefix"],
        smiles_max_length=int(data["smiles_max_length"]),
        math_environments=tuple(data.get("math_environments", [])),
        list_environments=tuple(data.get("list_environments", [])),
        markdown_preset=markdown.get("preset", "commonmark"),
        markdown_extensions=tuple(markdown.get("extensions", [])),
    )
