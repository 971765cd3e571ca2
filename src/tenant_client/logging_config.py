"""structlog setup for the client.

Credentials must never reach log output: whole fields named like a
credential are replaced, and ``Bearer <token>`` fragments embedded in
any string value (error messages, echoed headers) are masked.
"""

import logging
import re
import sys

import structlog

from tenant_client.config import Settings

REDACTED = "***REDACTED***"

CREDENTIAL_KEYS: frozenset[str] = frozenset(
    {
        "access_token",
        "authorization",
        "password",
        "refresh_token",
        "refreshtoken",
        "accesstoken",
        "token",
    }
)

_BEARER = re.compile(r"(Bearer\s+)[^\s\"',]+", re.IGNORECASE)

# Libraries that log every request on their own.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _redact_credentials(
    logger: logging.Logger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in event_dict.items():
        if key.lower() in CREDENTIAL_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, str) and "earer" in value:
            event_dict[key] = _BEARER.sub(rf"\g<1>{REDACTED}", value)
    return event_dict


def _renderer(environment: str) -> structlog.types.Processor:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(
    environment: str = "development",
    log_level: str = "INFO",
) -> None:
    """Route structlog through the stdlib root logger.

    Args:
        environment: 'production' renders JSON lines, anything else a
            colored console format.
        log_level: Root level name. Transport libraries stay at WARNING
            because the client emits its own ``api_request`` and
            ``api_response`` events.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            _redact_credentials,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(environment),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging_from_settings(settings: Settings) -> None:
    """``configure_logging`` driven by ``Settings.environment``/``log_level``."""
    configure_logging(environment=str(settings.environment), log_level=settings.log_level)
