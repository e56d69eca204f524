"""
Segmentation context logger.

Provides logging interface for segmentation context with automatic [segment] prefix.
All segmentation modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from scitext.utils.logger import setup_logger as _setup_logger
from scitext.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[segment]"


def setup_segmentation_logger(log_dir: Path) -> Path:
    """
    Setup logger for segmentation context.

    Args:
        log_dir: Directory for this session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="segment", log_dir=log_dir)


# Wrapper functions with automatic [segment] prefix


def _log_debug(message: str) -> None:
    """Log debug message with [segment] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level segmentation helpers


def log_rejected_candidate(fragment: str, reason: str) -> None:
    """Log an inline math candidate the scanner dropped."""
    _log_debug(f"Rejected {truncate_display(fragment, 40)!r}: {reason}")


def log_scan_result(text_length: int, spans: List) -> None:
    """
    Log the final span list of one scan.

    Args:
        text_length: Length of the scanned text
        spans: Final Span list
    """
    counts = {}
    for span in spans:
        counts[span.kind.value] = counts.get(span.kind.value, 0) + 1
    summary = ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items())) or "none"
    _log_debug(f"Scanned {text_length} chars -> {len(spans)} spans ({summary})")


def log_list_expansion(environment_name: str, item_count: int, nested_count: int) -> None:
    """Log the outcome of one list environment expansion."""
    if item_count == 0:
        _log_debug(f"{environment_name} environment produced no items")
    else:
        _log_debug(
            f"Expanded {environment_name} into {item_count} items "
            f"({nested_count} nested environments)"
        )
