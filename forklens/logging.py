"""
ForkLens logging utilities.

Provides configurable logging for GitHub API requests/responses and commit
count resolution. Ensures access tokens never reach the log output.
"""

import logging
import re
from typing import Any

# Create package-specific loggers
_sdk_logger = logging.getLogger("forklens")
_http_logger = logging.getLogger("forklens.http")
_resolver_logger = logging.getLogger("forklens.resolver")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # GitHub token formats (classic, fine-grained, OAuth, app tokens)
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-.]{8,}"), r"\1 [REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_SENSITIVE_KEYS = {"authorization", "token", "secret", "password", "api_key"}

# Error bodies are truncated to keep log lines bounded
_MAX_BODY_PREVIEW = 500


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    resolver_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure ForkLens logging.

    Args:
        level: Default log level for all ForkLens loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        resolver_level: Log level for commit count resolution (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from forklens.logging import configure_logging

        # Trace every GitHub request
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _resolver_logger.setLevel(resolver_level if resolver_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a ForkLens logger.

    Args:
        name: Logger name suffix (e.g., "http", "resolver"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"forklens.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask access tokens and similar secrets in a string.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values (headers, params)
        sensitive_keys: Set of keys to mask (default: authorization, token, secret, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """Log an outgoing GitHub request at DEBUG level with secrets masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {mask_sensitive_data(url)}"]

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    link: str | None = None,
) -> None:
    """
    Log a GitHub response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
        link: Raw Link header, useful when tracing pagination (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if link:
        log_parts.append(f"link={link}")

    _http_logger.debug(" | ".join(log_parts))


def log_api_error(
    status_code: int,
    reason: str,
    endpoint: str,
    error_body: Any,
    level: int = logging.WARNING,
) -> None:
    """
    Log structured diagnostics for an unsuccessful GitHub response.

    Args:
        status_code: HTTP status code
        reason: HTTP reason phrase
        endpoint: Requested endpoint
        error_body: Parsed (or raw) error body
        level: Log level (404s on listing endpoints are logged at DEBUG)
    """
    if not _http_logger.isEnabledFor(level):
        return

    if isinstance(error_body, dict):
        body_text = str(safe_log_dict(error_body))
    else:
        body_text = str(error_body)
    body_text = mask_sensitive_data(body_text)[:_MAX_BODY_PREVIEW]

    _http_logger.log(
        level,
        "GitHub API error: status=%s reason=%s endpoint=%s body=%s",
        status_code,
        reason,
        mask_sensitive_data(endpoint),
        body_text,
    )


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_api_error",
]
