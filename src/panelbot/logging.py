import logging
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

# Per-request INFO lines from the HTTP stack drown out command logs
NOISY_LOGGERS = ("httpx", "httpcore", "botocore", "aiobotocore")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure structlog/standard logging bridge with JSON output."""

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def command_context(**kwargs: Any) -> Iterator[structlog.stdlib.BoundLogger]:
    """Bind fields into structlog contextvars for everything logged inside the block.

    Clients and delivery strategies pick the fields up through
    ``merge_contextvars`` without being passed them.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield structlog.get_logger()
