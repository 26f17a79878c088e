"""structlog setup for the command line entry point."""

import logging
from typing import Any, MutableMapping

import structlog

SECRET_KEYS = frozenset({"token", "auth_token", "github_token", "gitea_token"})
REDACTED = "[Redacted]"


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: REDACTED if key in SECRET_KEYS and item else _redact(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def redact_secrets(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Processor that masks token values, including inside nested dicts such as a dumped config."""
    for key, value in list(event_dict.items()):
        if key in SECRET_KEYS and value:
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _redact(value)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog to print JSON lines to stdout, replacing any earlier configuration."""
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
