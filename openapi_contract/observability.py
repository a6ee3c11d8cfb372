"""Structured logging setup"""

import logging
import sys

import structlog


def configure_structlog(fmt: str = "console") -> None:
    """Route structlog events through stdlib logging.

    Library modules only call ``structlog.get_logger()``; entry points such as
    the CLI and the pytest plugin decide how the events are rendered.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Log to stderr at ``level`` and install the structlog processor chain"""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())
    configure_structlog(fmt)
