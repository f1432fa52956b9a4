"""Console logging adapter.

Sink for the engine's own diagnostics: phase start and completion, handler
failures, wiring problems and dispatch faults. Records go to stdout through
structlog, rendered for people while developing and as one JSON object per
line everywhere else.

Satisfies LoggerProtocol structurally; it does not subclass it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from auditaspect.core.errors import describe_error


class ConsoleAdapter:
    """structlog-backed LoggerProtocol for audit diagnostics.

    Constructing an adapter configures structlog for the process; the
    container builds exactly one (``get_logger()``).

    Args:
        use_json: Render each record as JSON instead of colored key=value text.
        level: Records below this level are dropped. ``logging.DEBUG`` is
            needed to see ``audit_phase_started``/``audit_phase_completed``.
    """

    def __init__(self, *, use_json: bool = False, level: int = logging.INFO) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            # Handler failures pass the exception as exc_info
            structlog.processors.format_exc_info,
        ]

        if use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        self._logger = structlog.get_logger("auditaspect")

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        """Emit a warning; the dispatcher uses this level for handler failures."""
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Emit an error record.

        Args:
            message: Event name, e.g. ``audit_dispatch_failed``.
            error: Exception to summarize as ``error_type``/``error_message``.
            **context: Extra structured fields (phase, target, ...).
        """
        self._logger.error(message, **self._with_error(error, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **self._with_error(error, context))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return an adapter that adds ``context`` to every record.

        The receiver is left unchanged. Reference handlers use this to tag
        their records with ``audit_handler``.
        """
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter

    def with_context(self, **context: Any) -> ConsoleAdapter:
        return self.bind(**context)

    @staticmethod
    def _with_error(
        error: Exception | None, context: dict[str, Any]
    ) -> dict[str, Any]:
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = describe_error(error)
        return context
