# priming/shared/logging_config.py
import sys
import logging
import structlog
from opentelemetry import trace
from priming.shared.config import settings

def add_service_context(_, __, event_dict):
    """Tags every entry with the service name and environment."""
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("env", settings.APP_ENV.value)
    return event_dict

def add_open_telemetry_spans(_, __, event_dict):
    """
    Adds the current trace/span ids, so that the priming events of one turn
    (frame pushed, narrowed, published...) can be lined up with the
    `use_case.priming.*` spans the engine call produced.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict

def configure_logging():
    """
    Sets up structlog for the priming service.

    Per-transition events (`priming_frame_*`) are logged at DEBUG, so
    LOG_LEVEL=INFO keeps only begin/end/publish summaries. LOG_FORMAT
    selects JSON lines (default) or the colored console renderer.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        add_open_telemetry_spans,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Host engine / third-party stdlib loggers share the stream and level.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
