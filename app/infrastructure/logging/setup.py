"""Structlog configuration for the localization engine.

``configure_logging()`` runs once on import so that every module can do
``logger = get_module_logger()`` at import time. The host calls it again at
startup with the values from ``Settings``.

Dependencies:
    - infrastructure.services.providers.get_settings
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.services.providers import get_settings

# Above CRITICAL, so nothing is emitted
_SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Return True when running under pytest."""
    return "pytest" in sys.modules


def _processors(prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        # Per-catalog context bound with bind_log_context()
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the standard library root logger.

    Output is JSON in production and a console rendering otherwise. Under
    pytest all output is suppressed.

    Args:
        log_level: Level name (DEBUG, INFO, ...). Defaults to
            ``settings.LOG_LEVEL``.
        is_production: Selects the JSON renderer. Defaults to
            ``settings.is_production``.

    Returns:
        A logger from the new configuration.
    """
    if _is_test_environment():
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=_SILENT, force=True)
        logging.root.setLevel(_SILENT)
        return structlog.stdlib.get_logger()

    settings = get_settings()
    prod_mode = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def _caller_module(depth: int = 2):
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    return inspect.getmodule(frame) if frame is not None else None


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Binds ``component`` (last dotted part) and ``module_path``.

    Example:
        # In infrastructure/i18n/registry.py
        logger = get_module_logger()
        # context: {"component": "registry", "module_path": "infrastructure.i18n.registry"}
    """
    module = _caller_module()
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
