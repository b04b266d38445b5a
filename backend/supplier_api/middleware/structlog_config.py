"""
Structlog configuration for the supplier directory API.

JSON logs on stdout, console rendering when attached to a terminal.
Buyer contact details submitted with quote requests are masked before
rendering, whichever logger emitted them.

Call configure() once at app startup.
"""
import logging
import os
import sys

import structlog

# Event keys and query parameters holding buyer contact details
SENSITIVE_FIELDS = frozenset({"email", "phone", "postcode", "contact_name"})
REDACTED = "[REDACTED]"


def redact_fields(values: dict) -> dict:
    """Copy of ``values`` with buyer contact fields masked."""
    return {k: (REDACTED if k.lower() in SENSITIVE_FIELDS else v) for k, v in values.items()}


def redact_buyer_contact(logger, method_name, event_dict):
    """Structlog processor masking buyer contact fields on any event."""
    for key in SENSITIVE_FIELDS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure(log_level: str | None = None) -> None:
    """Configure structlog and route stdlib logging through it.

    ``log_level`` defaults to the LOG_LEVEL environment variable.
    """
    level_name = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_buyer_contact,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if sys.stderr.isatty()
        else structlog.processors.JSONRenderer()
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # uvicorn access lines duplicate request_completed
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # slowapi logs every breach at WARNING; the 429 handler already does
    logging.getLogger("slowapi").setLevel(logging.ERROR)
