"""Common utilities shared by the inbound adapters.

Exception formatting, logging and HTTP status mapping live here so the
CLI and the API report failures the same way.
"""

from .exception_handler import (
    format_exception_json,
    get_error_code,
    get_http_status_code,
    handle_exception,
    log_exception,
)

__all__ = [
    "format_exception_json",
    "get_error_code",
    "get_http_status_code",
    "handle_exception",
    "log_exception",
]
