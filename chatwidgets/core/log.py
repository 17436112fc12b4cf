"""Logging setup for applications embedding the chat widgets core."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that are chatty at INFO during every completion call
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "azure.core.pipeline.policies.http_logging_policy")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the standard format.

    Args:
        level: Log level name (e.g., "INFO", "DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
