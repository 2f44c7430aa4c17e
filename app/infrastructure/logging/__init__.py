"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the localization engine using structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_module_logger(): Get a logger for the calling module
    - bind_log_context(): Context manager for scoped logging context

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_log_context,
    )

    # At startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")

    # Around per-file work
    with bind_log_context(catalog="fr-FR.ftl"):
        logger.info("parsing_catalog")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import bind_log_context

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_log_context",
]
