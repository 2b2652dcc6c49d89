"""
Logfire Integration

Structured logging with Logfire, bridged to the standard library so that
module loggers (logging.getLogger(__name__)) reach the same sink.
"""

import logging

import logfire

logger = logging.getLogger(__name__)


def configure_logfire(
    token: str = "",
    service_name: str = "hackarena-api",
    environment: str = "development",
    log_level: str = "INFO",
) -> None:
    """
    Initialize Logfire and route standard logging through it.

    Without a token nothing is sent; records still print to the console.
    """
    logfire.configure(
        token=token or None,
        service_name=service_name,
        environment=environment,
        send_to_logfire="if-token-present",
    )

    # Outbound GitHub calls
    logfire.instrument_httpx()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())
    if not any(
        isinstance(h, logfire.LogfireLoggingHandler) for h in root_logger.handlers
    ):
        root_logger.addHandler(logfire.LogfireLoggingHandler())

    if not token:
        logger.warning("Logfire token not set - traces stay local")
