"""Scoped context binding for structured logging.

Binds key/value pairs to every log entry emitted inside a block, so that
messages logged deep inside the parser or bundle construction still carry
the catalog file they belong to.

Usage:
    from infrastructure.logging import bind_log_context

    with bind_log_context(catalog="en-US.ftl"):
        logger.info("parsing_catalog")

Dependencies:
    - structlog.contextvars
"""

from contextlib import contextmanager
from typing import Any, Generator
import structlog


@contextmanager
def bind_log_context(**fields: Any) -> Generator[None, None, None]:
    """Bind context to all logs within the context manager.

    ``None`` values are skipped. Previously bound values for the same keys
    are restored when the block exits.

    Args:
        **fields: Key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context = {key: value for key, value in fields.items() if value is not None}

    with structlog.contextvars.bound_contextvars(**context):
        yield
