"""
Skills context logger.

Provides logging interface for the skills context with automatic [skills] prefix.
All skills modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from bidmatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[skills]"


def setup_skills_logger(log_dir: Path, command: str = "skills") -> Path:
    """
    Setup logger for skills context.

    Args:
        log_dir: Directory for this logging session
        command: Script command name recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="skills",
        log_dir=log_dir,
        extra_provenance={"Command": command},
    )


def _log_info(message: str) -> None:
    """Log info message with [skills] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [skills] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_rejected_mutation(operation: str, error: Exception) -> None:
    """Log a dictionary or queue mutation that failed validation."""
    _log_debug(f"{operation} rejected: {getattr(error, 'message', error)}")


def log_version_bump(old_version: str, new_version: str) -> None:
    _log_info(f"Dictionary version {old_version} -> {new_version}")
