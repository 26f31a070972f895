"""Structlog configuration for the Ratebook API.

Probes are the only emitters of log events. Resolution outcomes
(rule set selected, candidate resolved, unresolved) are logged at debug and
info, store failures at error. Output is a colored console stream on a TTY
and one JSON object per line everywhere else, so the log pipeline can index
``tenant_id``, ``rule_set_id`` and ``request_id`` directly.
"""

import logging
import os
import sys

import structlog


def configure_logging(debug: bool = False, app_name: str | None = None) -> None:
    """Configure structlog for the process.

    Args:
        debug: Emit debug-level events (rule set selection, candidate loads)
            when True; otherwise only info and above are rendered.
        app_name: Bound as ``service`` on every event when given.
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if app_name is not None:
        structlog.contextvars.bind_contextvars(service=app_name)
