"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vita.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, template_id: str = "") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        template_id: Template being composed, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from vita.contexts.templating.logger import setup_templating_logger, _log_info

        log_file = setup_templating_logger(log_dir, template_id="classic")
        _log_info("Composing document...")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": template_id or "(from resume meta)"},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_export_start(resume_name: str, template_id: str, backend_name: str) -> None:
    """Log start of a document export."""
    _log_info(f"Exporting {resume_name} with template '{template_id}'")
    _log_debug(f"Backend: {backend_name}")


def log_export_result(resume_name: str, num_bytes: int, elapsed_time: float) -> None:
    """Log a finished export."""
    _log_success(f"{resume_name}: exported {num_bytes} bytes ({elapsed_time:.2f}s)")
