"""Logging setup for the `similar` command.

stdout is reserved for the cluster report, so every log record, whether
emitted through structlog or a stdlib logger, is rendered on stderr:
JSON lines when `SIMILAR_LOG_JSON` is set, a readable console format
otherwise.
"""

import logging
import sys

import structlog


def configure_logging(json_output: bool = False, log_level: str = "WARNING") -> None:
    """Route structlog and stdlib records through one stderr handler.

    Args:
        json_output: Emit one JSON object per record instead of console lines.
        log_level: Minimum level name, e.g. ``"WARNING"`` or ``"DEBUG"``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))
