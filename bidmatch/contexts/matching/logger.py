"""
Matching context logger.

Provides logging interface for the matching context with automatic [match] prefix.
All matching modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from bidmatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[match]"


def setup_matching_logger(log_dir: Path, command: str = "match") -> Path:
    """
    Setup logger for matching context.

    Args:
        log_dir: Directory for this logging session
        command: Script command name recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="match",
        log_dir=log_dir,
        extra_provenance={"Command": command},
    )


def _log_info(message: str) -> None:
    """Log info message with [match] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [match] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_stack_score(target_size: int, overlap: int, score: int) -> None:
    _log_debug(f"Stack score {score} (overlap {overlap}/{target_size})")


def log_correlation(spec_a_id: str, spec_b_id: str, overall_score: float) -> None:
    _log_debug(f"Correlation {spec_a_id} -> {spec_b_id}: {overall_score:.4f}")
