"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from loguru import logger

from scitext.contexts.rendering.config import CONFIG_PATH_ENV_VAR
from scitext.utils.logger import setup_logger as _setup_logger
from scitext.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, render_as_markdown: bool = True, console_level: str = "INFO") -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        render_as_markdown: Recorded in the provenance header
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        from scitext.contexts.rendering.logger import setup_rendering_logger, log_render_start

        log_file = setup_rendering_logger(log_dir)
        log_render_start(len(content), render_as_markdown=True, inline=False)
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Markdown mode": render_as_markdown,
            "Config override": os.getenv(CONFIG_PATH_ENV_VAR) or "none",
        },
        console_level=console_level,
    )


# Wrapper functions with automatic [render] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering helpers


def log_render_start(content_length: int, render_as_markdown: bool, inline: bool) -> None:
    """Log the start of one render call."""
    _log_debug(
        f"Rendering {content_length} chars (markdown={render_as_markdown}, inline={inline})"
    )


def log_pipeline_choice(pipeline: str, reason: str) -> None:
    """Log which pipeline a document was routed to."""
    _log_debug(f"Using {pipeline} pipeline: {reason}")


def log_render_result(node_count: int) -> None:
    _log_debug(f"Rendered {node_count} top-level nodes")


def log_fragment_failure(kind: str, fragment: str, error: Exception) -> None:
    """Log a collaborator failure for one fragment; siblings keep rendering."""
    _log_warning(f"Failed to render {kind} {truncate_display(fragment, 60)!r}: {error}")


def log_validation_failure(error: Exception) -> None:
    _log_warning(f"Rejected content: {getattr(error, 'message', error)}")
