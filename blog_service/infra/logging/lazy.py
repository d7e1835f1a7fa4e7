"""Lazy evaluation support for logging.

Expensive debug messages (for example, dumping a composed query descriptor)
are wrapped in a lambda and only evaluated when the log level is enabled.
Production runs with DEBUG disabled pay nothing for them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and args on demand.

    Example:
        ```python
        logger = LazyLoggerAdapter(logging.getLogger(__name__), {})
        logger.debug(lambda: f"Composed: {describe(descriptor)}")
        logger.debug("Where keys: %s", lambda: sorted(descriptor.where))
        ```
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Log message with lazy evaluation support.

        Args:
            level: Numeric log level (e.g., logging.DEBUG).
            msg: Log message or callable returning message.
            *args: Format arguments (may include callables).
            **kwargs: Additional kwargs for logging.
        """
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            evaluated_args = tuple(arg() if callable(arg) else arg for arg in args)
        else:
            evaluated_args = args

        super().log(level, msg, *evaluated_args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Merge adapter context into ``extra`` without clobbering the caller's."""
        if self.extra:
            kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger adapter with lazy evaluation support.

    Args:
        name: Logger name (typically ``__name__``).
        **context: Static fields added to every record's ``extra``.

    Returns:
        Logger adapter with lazy evaluation support.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})


__all__ = ["LazyLoggerAdapter", "get_lazy_logger"]
