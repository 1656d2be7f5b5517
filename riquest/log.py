"""
structlog setup. Nothing here runs on import; applications call setup_logging().
"""

import logging
import sys
from typing import Optional

import structlog

from .config import config


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Route structlog through the stdlib logging module.

    Falls back to the ``logging`` section of the loaded configuration for any
    argument left as None.
    """
    log_config = config.logging
    level = (level or log_config.get('level', 'INFO')).upper()
    if json_logs is None:
        json_logs = log_config.get('json', True)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

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
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
