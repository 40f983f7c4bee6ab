"""Logging helpers: debug-only logging and errors with context."""

import logging
import traceback
from typing import Any, Optional

from gpl_site.config import DEBUG

logger = logging.getLogger("GPL")


def debug_log(message: str, *args, **kwargs) -> None:
    """
    Log a debug message only if APP_DEBUG is enabled.
    
    Args:
        message: Log message (supports % formatting)
        *args: Positional arguments for message formatting
        **kwargs: Keyword arguments (level, exc_info, etc.)
    """
    if DEBUG:
        level = kwargs.pop("level", logging.DEBUG)
        logger.log(level, message, *args, **kwargs)


def error_log(
    message: str,
    exc: Optional[BaseException] = None,
    context: Optional[dict] = None,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Log an error with context and, in debug mode, the full traceback.
    
    Args:
        message: Error message
        exc: Optional exception object
        context: Optional dictionary with additional context (submission kind, request path, ...)
        log: Logger to write to (defaults to the "GPL" logger)
    """
    target = log or logger
    parts = [message]
    
    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
    
    if exc is not None:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if DEBUG:
            parts.append(
                "Traceback:\n" + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            )
    
    target.error(" | ".join(parts))


def log_request_error(
    request: Any,
    exc: BaseException,
    message: Optional[str] = None,
) -> None:
    """
    Log an error with request context (path, method, user agent).
    
    Args:
        request: Request object (should have url, method, headers)
        exc: The exception
        message: Optional custom message
    """
    context = {}
    url = getattr(request, "url", None)
    if url is not None:
        context["path"] = getattr(url, "path", str(url))
    method = getattr(request, "method", None)
    if method:
        context["method"] = method
    headers = getattr(request, "headers", None)
    if headers is not None:
        context["user_agent"] = headers.get("user-agent", "unknown")
    
    error_log(message or f"Unhandled exception: {type(exc).__name__}", exc=exc, context=context)
