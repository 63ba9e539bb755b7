"""structlog setup for the client and CLI

Log records go to stderr so command output on stdout stays clean. Both
structlog events and stdlib records (httpx, asyncio) share one renderer.
"""

import logging
import sys

import structlog

from .config import ClientConfig, load_client_config

# Third-party loggers that are noisy at INFO; they only surface warnings
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(config: ClientConfig | None = None) -> None:
    """Route structlog and stdlib logging through a single stderr handler

    Args:
        config: log_format and log_level source; loaded from the PRAZOS_*
            environment when None
    """
    config = config or load_client_config()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
    ]
    if config.log_format == "json":
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(config.log_format),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
